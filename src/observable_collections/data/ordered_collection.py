from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..events import AddParams, CollectionEvent, EventDispatcher, RemoveParams, ReplaceParams
from ..events.topics import operations
from ..exceptions import InvalidIndexError
from ..settings import CollectionSettings, get_settings
from .predicates import SortPredicate, sort_key
from .queries import CollectionQueries

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrderedCollection(CollectionQueries[T]):
    """Ordered sequence of items that announces every mutation.

    Each mutating method applies its change to the backing list first and
    then triggers its events on ``events``, always finishing with CHANGE:

    - add / add_many / prepend / prepend_many / insert: ADD, CHANGE
    - remove / remove_many / remove_where: REMOVE, CHANGE
    - replace / replace_item: REPLACE, CHANGE
    - clear: REMOVE (clear=True), CLEAR, CHANGE
    - sort_by: SORT, CHANGE
    - transform: CHANGE

    Calls that change nothing trigger nothing, except clear(). Listener
    exceptions propagate after the data has already changed.
    """

    def __init__(
        self,
        data: Optional[Iterable[T]] = None,
        settings: Optional[CollectionSettings] = None,
        *,
        owner: Any = None,
    ) -> None:
        """
        Args:
            data: Initial items, copied.
            settings: Overrides the process-wide settings, which are otherwise
                read once here so a broken config fails before any mutation.
            owner: Object reported as ``Event.caller``; defaults to the collection.
        """
        self._settings: CollectionSettings = settings if settings is not None else get_settings()
        self._caller = owner if owner is not None else self
        self._data: List[T] = self._normalize(list(data)) if data is not None else []
        self.events = EventDispatcher(settings=self._settings)

    @property
    def settings(self) -> CollectionSettings:
        return self._settings

    def _derive(self, data: List[Any]) -> "OrderedCollection[Any]":
        return OrderedCollection(data, settings=self._settings)

    # hooks for subclasses that restrict membership

    def _accept(self, items: Sequence[T]) -> List[T]:
        """Items out of ``items`` that may be inserted, in order."""
        return list(items)

    def _normalize(self, items: List[T]) -> List[T]:
        """Initial or transformed contents as they should be stored."""
        return items

    def _can_replace(self, index: int, replacement: T) -> bool:
        return True

    # notifications

    def _notify_added(self, pairs: Iterable[Tuple[int, T]]) -> None:
        self.events.trigger(CollectionEvent.ADD, AddParams(operations(pairs)), self._caller)
        self.events.trigger(CollectionEvent.CHANGE, None, self._caller)

    def _notify_removed(self, pairs: Iterable[Tuple[int, T]]) -> None:
        self.events.trigger(CollectionEvent.REMOVE, RemoveParams(operations(pairs)), self._caller)
        self.events.trigger(CollectionEvent.CHANGE, None, self._caller)

    # adding

    def add(self, item: T) -> Optional[T]:
        """Append ``item``. Returns the item, or None when it was not accepted."""
        if not self._accept([item]):
            return None
        self._data.append(item)
        logger.debug("Appended item to %s (count=%d)", type(self).__name__, len(self._data))
        self._notify_added([(len(self._data) - 1, item)])
        return item

    def add_many(self, items: Iterable[T]) -> List[T]:
        """Append all accepted ``items`` with a single ADD/CHANGE pair. Returns them."""
        accepted = self._accept(list(items))
        if not accepted:
            return []
        start = len(self._data)
        self._data.extend(accepted)
        logger.debug("Appended %d item(s) to %s", len(accepted), type(self).__name__)
        self._notify_added(enumerate(accepted, start))
        return accepted

    def prepend(self, item: T) -> Optional[T]:
        return self.insert(item, 0)

    def prepend_many(self, items: Iterable[T]) -> List[T]:
        """Insert all accepted ``items`` at the front, keeping their order."""
        accepted = self._accept(list(items))
        if not accepted:
            return []
        self._data[0:0] = accepted
        logger.debug("Prepended %d item(s) to %s", len(accepted), type(self).__name__)
        self._notify_added(enumerate(accepted))
        return accepted

    def insert(self, item: T, index: int) -> Optional[T]:
        """Insert ``item`` at ``index`` (0 <= index <= count()).

        Out-of-range indices raise InvalidIndexError, or are clamped when the
        ``insert_bounds`` setting is "clamp".
        """
        index = self._insert_index(index)
        if not self._accept([item]):
            return None
        self._data.insert(index, item)
        logger.debug("Inserted item into %s at index %d", type(self).__name__, index)
        self._notify_added([(index, item)])
        return item

    def _insert_index(self, index: int) -> int:
        size = len(self._data)
        if 0 <= index <= size:
            return index
        if self.settings.insert_bounds == "clamp":
            return max(0, min(index, size))
        raise InvalidIndexError(f"insert index {index} out of range 0..{size}")

    # removing

    def remove(self, item: T) -> Optional[T]:
        """Remove the first item equal to ``item``. Returns it, or None if absent."""
        index = self.index_of(item)
        if index < 0:
            return None
        removed = self._data.pop(index)
        logger.debug("Removed item from %s at index %d", type(self).__name__, index)
        self._notify_removed([(index, removed)])
        return removed

    def remove_many(self, items: Iterable[T]) -> List[T]:
        """Remove every occurrence of each of ``items``. Returns what was removed."""
        targets = list(items)
        if not targets:
            return []
        kept: List[T] = []
        removed: List[Tuple[int, T]] = []
        for index, existing in enumerate(self._data):
            if existing in targets:
                removed.append((index, existing))
            else:
                kept.append(existing)
        if not removed:
            return []
        self._data = kept
        logger.debug("Removed %d item(s) from %s", len(removed), type(self).__name__)
        self._notify_removed(removed)
        return [item for _, item in removed]

    def remove_where(self, predicate: Optional[Callable[[T], bool]] = None, **properties: Any) -> List[T]:
        return self.remove_many(self.where(predicate, **properties))

    # replacing

    def replace(self, index: int, replacement: T) -> Optional[T]:
        """Swap the item at ``index`` for ``replacement`` and return the old item.

        An index outside 0..count()-1 changes nothing and returns None.
        """
        if index < 0 or index >= len(self._data):
            return None
        if not self._can_replace(index, replacement):
            return None
        current = self._data[index]
        self._data[index] = replacement
        logger.debug("Replaced item in %s at index %d", type(self).__name__, index)
        self.events.trigger(
            CollectionEvent.REPLACE, ReplaceParams(source=current, replacement=replacement, index=index), self._caller
        )
        self.events.trigger(CollectionEvent.CHANGE, None, self._caller)
        return current

    def replace_item(self, source: T, replacement: T) -> Optional[T]:
        return self.replace(self.index_of(source), replacement)

    def clear(self) -> None:
        removed = list(enumerate(self._data))
        self._data = []
        logger.debug("Cleared %s (%d item(s))", type(self).__name__, len(removed))
        self.events.trigger(CollectionEvent.REMOVE, RemoveParams(operations(removed), clear=True), self._caller)
        self.events.trigger(CollectionEvent.CLEAR, None, self._caller)
        self.events.trigger(CollectionEvent.CHANGE, None, self._caller)

    # reordering

    def sort_by(self, predicate: SortPredicate) -> None:
        """Stable sort by a key function, property name or Comparator."""
        self._data = sorted(self._data, key=sort_key(predicate))
        self.events.trigger(CollectionEvent.SORT, None, self._caller)
        self.events.trigger(CollectionEvent.CHANGE, None, self._caller)

    def transform(self, fn: Callable[[T], T]) -> "OrderedCollection[T]":
        """Replace every item with ``fn(item)`` in place. Returns self for chaining."""
        self._data = self._normalize([fn(item) for item in self._data])
        self.events.trigger(CollectionEvent.CHANGE, None, self._caller)
        return self
