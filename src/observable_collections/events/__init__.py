from .dispatcher import EventDispatcher, Listener
from .envelope import Event
from .topics import AddParams, CollectionEvent, Operation, RemoveParams, ReplaceParams

__all__ = [
    "AddParams",
    "CollectionEvent",
    "Event",
    "EventDispatcher",
    "Listener",
    "Operation",
    "RemoveParams",
    "ReplaceParams",
]
