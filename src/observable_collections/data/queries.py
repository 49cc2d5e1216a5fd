from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from ..events import EventDispatcher, Listener
from .predicates import matcher, read_property

T = TypeVar("T")
S = TypeVar("S")


class CollectionQueries(ABC, Generic[T]):
    """Read-only operations and event shortcuts shared by every collection.

    Implementations provide ``_data`` (the backing list), ``events`` (their
    EventDispatcher) and ``_derive()`` (build a new plain collection).
    None of these methods mutate state or trigger events.
    """

    _data: List[T]
    events: EventDispatcher

    @abstractmethod
    def _derive(self, data: List[Any]) -> Any:
        """Build a plain collection holding ``data``, sharing these settings."""

    # events

    def on(self, topics: Any, callback: Callable[..., Any], context: Any = None, once: bool = False) -> Listener:
        return self.events.on(topics, callback, context=context, once=once)

    def once(self, topics: Any, callback: Callable[..., Any], context: Any = None) -> Listener:
        return self.events.once(topics, callback, context=context)

    def off(self, topics: Any = None, callback: Any = None, context: Any = None) -> EventDispatcher:
        return self.events.off(topics, callback, context=context)

    # size

    def count(self) -> int:
        return len(self._data)

    @property
    def length(self) -> int:
        return self.count()

    def __len__(self) -> int:
        return self.count()

    def is_empty(self) -> bool:
        return self.count() == 0

    # access

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._data))

    def __contains__(self, item: object) -> bool:
        return self.contains(item)  # type: ignore[arg-type]

    def __getitem__(self, index: Any) -> Any:
        return self._data[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def first(self) -> Optional[T]:
        return self._data[0] if self._data else None

    def last(self) -> Optional[T]:
        return self._data[-1] if self._data else None

    def get(self, index: int) -> Optional[T]:
        """Item at ``index``, or None when out of range. Negative indices are out of range."""
        if 0 <= index < len(self._data):
            return self._data[index]
        return None

    def index_of(self, item: T) -> int:
        """Index of the first item equal to ``item``, or -1."""
        for index, existing in enumerate(self._data):
            if existing == item:
                return index
        return -1

    def contains(self, item: T) -> bool:
        return self.index_of(item) >= 0

    def to_list(self) -> List[T]:
        """Shallow copy of the items in order."""
        return list(self._data)

    all = to_list

    def clone(self) -> Any:
        """New OrderedCollection holding the same items, with no listeners."""
        return self._derive(list(self._data))

    # searching

    def where(self, predicate: Optional[Callable[[T], bool]] = None, **properties: Any) -> List[T]:
        """All items matching a predicate, or whose properties equal the given values.

        ``where(author="Shakespeare", year=1611)`` reads keys from mappings and
        attributes from other objects.
        """
        test = matcher(predicate, **properties)
        return [item for item in self._data if test(item)]

    def where_first(self, predicate: Optional[Callable[[T], bool]] = None, **properties: Any) -> Optional[T]:
        test = matcher(predicate, **properties)
        for item in self._data:
            if test(item):
                return item
        return None

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        return [item for item in self._data if predicate(item)]

    filter = find

    def find_first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for item in self._data:
            if predicate(item):
                return item
        return None

    def pluck(self, name: str) -> List[Any]:
        """Value of property ``name`` for every item (None where missing)."""
        return [read_property(item, name, None) for item in self._data]

    # iteration helpers

    def each(self, fn: Callable[[T], Any]) -> None:
        for item in list(self._data):
            fn(item)

    def map(self, fn: Callable[[T], S]) -> Any:
        """New OrderedCollection of ``fn(item)`` for every item."""
        return self._derive([fn(item) for item in self._data])

    def reject(self, predicate: Callable[[T], bool]) -> Any:
        """New OrderedCollection without the items matching ``predicate``."""
        return self._derive([item for item in self._data if not predicate(item)])
