from importlib.metadata import version, PackageNotFoundError

from .data import OrderedCollection, SortedCollection, UniqueCollection, by_comparator
from .events import CollectionEvent, Event, EventDispatcher, Listener
from .exceptions import ConfigError, InvalidIndexError, ObservableCollectionsError
from .logging_setup import configure_logging
from .settings import CollectionSettings, configure, get_settings, load_settings

__all__ = [
    "__version__",
    "CollectionEvent",
    "CollectionSettings",
    "ConfigError",
    "Event",
    "EventDispatcher",
    "InvalidIndexError",
    "Listener",
    "ObservableCollectionsError",
    "OrderedCollection",
    "SortedCollection",
    "UniqueCollection",
    "by_comparator",
    "configure",
    "configure_logging",
    "get_settings",
    "load_settings",
]

try:
    __version__ = version("observable-collections")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
