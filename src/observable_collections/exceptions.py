class ObservableCollectionsError(Exception):
    """Base exception for the observable-collections package."""


class InvalidIndexError(ObservableCollectionsError, IndexError):
    """Raised when an insertion index falls outside the collection bounds."""


class ConfigError(ObservableCollectionsError):
    """Raised when settings cannot be read or fail validation."""
