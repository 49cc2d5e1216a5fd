from .ordered_collection import OrderedCollection
from .predicates import Comparator, PropertyMatcher, by_comparator, sort_key
from .sorted_collection import SortedCollection
from .unique_collection import UniqueCollection

__all__ = [
    "Comparator",
    "OrderedCollection",
    "PropertyMatcher",
    "SortedCollection",
    "UniqueCollection",
    "by_comparator",
    "sort_key",
]
