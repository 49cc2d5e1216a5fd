from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Dict, Mapping, Optional, Union

__all__ = ["MISSING", "PropertyMatcher", "Comparator", "read_property", "matcher", "by_comparator", "sort_key"]


class _Missing:
    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return "MISSING"


MISSING: Any = _Missing()


def read_property(item: Any, name: str, default: Any = MISSING) -> Any:
    """Read ``name`` from a mapping by key, or from any other object by attribute."""
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


@dataclass(frozen=True)
class PropertyMatcher:
    """Predicate matching items whose named properties all equal the given values.

    A property the item does not have never matches, even against None.
    """

    properties: Dict[str, Any]

    def __call__(self, item: Any) -> bool:
        for name, expected in self.properties.items():
            value = read_property(item, name)
            if value is MISSING or value != expected:
                return False
        return True


def matcher(predicate: Optional[Callable[[Any], bool]] = None, **properties: Any) -> Callable[[Any], bool]:
    """Resolve the ``where(...)`` calling conventions into a single predicate.

    Either pass a predicate callable or keyword properties, not both.
    """
    if predicate is not None:
        if properties:
            raise TypeError("pass either a predicate or properties, not both")
        if not callable(predicate):
            raise TypeError("predicate must be callable")
        return predicate
    return PropertyMatcher(dict(properties))


@dataclass(frozen=True)
class Comparator:
    """Wraps a three-way ``cmp(a, b) -> int`` so it can be used as a sort predicate."""

    cmp: Callable[[Any, Any], int]

    def key(self) -> Callable[[Any], Any]:
        return cmp_to_key(self.cmp)


def by_comparator(cmp: Callable[[Any, Any], int]) -> Comparator:
    return Comparator(cmp)


SortPredicate = Union[Callable[[Any], Any], str, Comparator]


def _property_key(name: str) -> Callable[[Any], Any]:
    # items without the property (or holding None) sort last, in stable order
    def key(item: Any) -> Any:
        value = read_property(item, name)
        if value is MISSING or value is None:
            return (1, 0)
        return (0, value)

    return key


def sort_key(predicate: SortPredicate) -> Callable[[Any], Any]:
    """Turn a sort predicate into a key function for ``sorted``.

    Accepts a key function, a property name, or a Comparator. A property
    name orders items lacking that property after all the others.
    """
    if isinstance(predicate, Comparator):
        return predicate.key()
    if isinstance(predicate, str):
        return _property_key(predicate)
    if callable(predicate):
        return predicate
    raise TypeError(f"unsupported sort predicate: {predicate!r}")
