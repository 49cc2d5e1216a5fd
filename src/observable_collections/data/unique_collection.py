from __future__ import annotations

import logging
from typing import List, Sequence, TypeVar

from .ordered_collection import OrderedCollection

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _first_occurrences(items: Sequence[T]) -> List[T]:
    unique: List[T] = []
    for item in items:
        if item not in unique:
            unique.append(item)
    return unique


class UniqueCollection(OrderedCollection[T]):
    """OrderedCollection that never holds two equal items.

    Duplicates are dropped silently: add() of a present item returns None and
    triggers nothing, and add_many() announces only the accepted items (and
    nothing at all when none are accepted). The same filter applies to
    prepend, prepend_many and insert. A replacement equal to an item at a
    different index is refused like an out-of-range replace.
    """

    def _accept(self, items: Sequence[T]) -> List[T]:
        accepted = [item for item in _first_occurrences(items) if item not in self._data]
        dropped = len(items) - len(accepted)
        if dropped:
            logger.debug("Dropped %d duplicate item(s) from %s", dropped, type(self).__name__)
        return accepted

    def _normalize(self, items: List[T]) -> List[T]:
        return _first_occurrences(items)

    def _can_replace(self, index: int, replacement: T) -> bool:
        existing = self.index_of(replacement)
        return existing < 0 or existing == index
