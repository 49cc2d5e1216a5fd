from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from ..settings import CollectionSettings
from .ordered_collection import OrderedCollection
from .predicates import SortPredicate
from .queries import CollectionQueries
from .unique_collection import UniqueCollection

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SortedCollection(CollectionQueries[T]):
    """Unique collection kept in order by a sort predicate.

    Wraps a UniqueCollection and shares its dispatcher. Every mutation first
    runs the wrapped collection's full event sequence, then sort() re-orders
    the items and triggers SORT and CHANGE. Listeners therefore see two CHANGE
    events per mutation, and SORT/CHANGE even when a duplicate add changed
    nothing. clear() does not re-sort.

    The predicate is a key function, a property name, or a Comparator built
    with by_comparator(). Sorting is stable. With no predicate the items keep
    insertion order and sort() does nothing.
    """

    def __init__(
        self,
        data: Optional[Iterable[T]] = None,
        sort_predicate: Optional[SortPredicate] = None,
        settings: Optional[CollectionSettings] = None,
    ) -> None:
        self._set: UniqueCollection[T] = UniqueCollection(data, settings=settings, owner=self)
        self.events = self._set.events
        self._sort_predicate = sort_predicate
        self.sort()

    @property
    def _data(self) -> List[T]:  # type: ignore[override]
        return self._set._data

    @property
    def settings(self) -> CollectionSettings:
        return self._set.settings

    def _derive(self, data: List[Any]) -> OrderedCollection[Any]:
        return self._set._derive(data)

    @property
    def sort_predicate(self) -> Optional[SortPredicate]:
        return self._sort_predicate

    @sort_predicate.setter
    def sort_predicate(self, predicate: Optional[SortPredicate]) -> None:
        self._sort_predicate = predicate
        self.sort()

    def sort(self) -> None:
        """Re-order the items by the sort predicate, then trigger SORT and CHANGE."""
        if self._sort_predicate is None:
            return
        logger.debug("Sorting %d item(s)", len(self._set))
        self._set.sort_by(self._sort_predicate)

    def add(self, item: T) -> Optional[T]:
        added = self._set.add(item)
        self.sort()
        return added

    def add_many(self, items: Iterable[T]) -> List[T]:
        added = self._set.add_many(items)
        self.sort()
        return added

    def prepend(self, item: T) -> Optional[T]:
        added = self._set.prepend(item)
        self.sort()
        return added

    def prepend_many(self, items: Iterable[T]) -> List[T]:
        added = self._set.prepend_many(items)
        self.sort()
        return added

    def insert(self, item: T, index: int) -> Optional[T]:
        added = self._set.insert(item, index)
        self.sort()
        return added

    def remove(self, item: T) -> Optional[T]:
        removed = self._set.remove(item)
        self.sort()
        return removed

    def remove_many(self, items: Iterable[T]) -> List[T]:
        removed = self._set.remove_many(items)
        self.sort()
        return removed

    def remove_where(self, predicate: Optional[Callable[[T], bool]] = None, **properties: Any) -> List[T]:
        return self.remove_many(self.where(predicate, **properties))

    def replace(self, index: int, replacement: T) -> Optional[T]:
        current = self._set.replace(index, replacement)
        self.sort()
        return current

    def replace_item(self, source: T, replacement: T) -> Optional[T]:
        current = self._set.replace_item(source, replacement)
        self.sort()
        return current

    def transform(self, fn: Callable[[T], T]) -> "SortedCollection[T]":
        self._set.transform(fn)
        self.sort()
        return self

    def clear(self) -> None:
        self._set.clear()
