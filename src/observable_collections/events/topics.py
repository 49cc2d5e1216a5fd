from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Tuple, TypeVar

T = TypeVar("T")


class CollectionEvent(str, Enum):
    """Topics raised by collections. Members compare equal to their string value."""

    ADD = "add"
    CHANGE = "change"
    REMOVE = "remove"
    REPLACE = "replace"
    CLEAR = "clear"
    SORT = "sort"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Operation(Generic[T]):
    """An item together with the index it was added at or removed from."""

    item: T
    index: int


@dataclass(frozen=True)
class AddParams(Generic[T]):
    """Payload of ADD. Indices refer to positions after the insertion."""

    operations: Tuple[Operation[T], ...]

    @property
    def items(self) -> List[T]:
        return [op.item for op in self.operations]


@dataclass(frozen=True)
class RemoveParams(Generic[T]):
    """Payload of REMOVE. Indices refer to positions before the removal.

    ``clear`` is True when the removal is part of clear().
    """

    operations: Tuple[Operation[T], ...]
    clear: bool = False

    @property
    def items(self) -> List[T]:
        return [op.item for op in self.operations]


@dataclass(frozen=True)
class ReplaceParams(Generic[T]):
    """Payload of REPLACE."""

    source: T
    replacement: T
    index: int


def operations(pairs: Any) -> Tuple[Operation[Any], ...]:
    """Build an operations tuple from ``(index, item)`` pairs."""
    return tuple(Operation(item=item, index=index) for index, item in pairs)
