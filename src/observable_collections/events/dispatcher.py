from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..settings import CollectionSettings, get_settings
from .envelope import Event

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]
Topics = Union[str, Enum, Iterable[Union[str, Enum]]]


@dataclass(eq=False)
class Listener:
    """A registration handle returned by EventDispatcher.on().

    Attributes:
        callback: Callable invoked with the Event.
        context: Optional receiver; when set the callback is called as
            ``callback(context, event)``.
        once: Unregister the listener right before its first invocation.
    """

    callback: Callback
    context: Any = None
    once: bool = False

    def invoke(self, event: Event) -> Any:
        if self.context is None:
            return self.callback(event)
        return self.callback(self.context, event)

    def matches(self, callback: Any = None, context: Any = None) -> bool:
        if callback is not None:
            if isinstance(callback, Listener):
                if callback is not self:
                    return False
            # == rather than `is` so that bound methods fetched twice still match
            elif self.callback != callback:
                return False
        if context is not None and self.context is not context:
            return False
        return True


def _topic_name(topic: Union[str, Enum]) -> str:
    if isinstance(topic, Enum):
        return str(topic.value)
    return str(topic)


def _split_topics(topics: Topics) -> List[str]:
    """Normalise topic arguments into a de-duplicated list of topic names.

    Strings may hold several names separated by spaces and/or commas.
    """
    if isinstance(topics, Enum):
        names = [_topic_name(topics)]
    elif isinstance(topics, str):
        names = topics.replace(",", " ").split()
    else:
        names = [name for t in topics for name in _split_topics(t)]
    seen: List[str] = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return seen


class EventDispatcher:
    """Synchronous, topic-keyed publish/subscribe hub.

    Listeners are delivered in registration order. Each topic's listener list
    is replaced rather than mutated whenever registrations change, so a
    dispatch pass iterates the list it started with: listeners added during
    the pass wait for the next trigger. Listeners removed during the pass are
    skipped for the rest of it.

    Exceptions raised by listeners are not caught; they abort the pass and
    propagate to the caller of trigger().
    """

    def __init__(self, settings: Optional[CollectionSettings] = None) -> None:
        self._topics: Dict[str, List[Listener]] = {}
        self._settings: CollectionSettings = settings if settings is not None else get_settings()

    @property
    def settings(self) -> CollectionSettings:
        return self._settings

    def on(self, topics: Topics, callback: Callback, context: Any = None, once: bool = False) -> Listener:
        """Register ``callback`` for one or more topics.

        Args:
            topics: Topic name, enum member, iterable of those, or a string of
                names delimited by spaces/commas.
            callback: Callable accepting the Event (after ``context`` if given).
            context: Optional receiver passed as first argument.
            once: Remove the registration before its first invocation.

        Returns:
            The Listener handle, usable with off().
        """
        if not callable(callback):
            raise TypeError("callback must be callable")
        names = _split_topics(topics)
        if not names:
            raise ValueError("at least one topic is required")
        listener = Listener(callback=callback, context=context, once=once)
        for name in names:
            self._topics[name] = self._topics.get(name, []) + [listener]
            logger.debug(
                "Subscribed %s to '%s'%s", getattr(callback, "__name__", str(callback)), name, " (once)" if once else ""
            )
        return listener

    def once(self, topics: Topics, callback: Callback, context: Any = None) -> Listener:
        """Register a listener that fires at most once per topic."""
        return self.on(topics, callback, context=context, once=True)

    def off(self, topics: Optional[Topics] = None, callback: Any = None, context: Any = None) -> "EventDispatcher":
        """Remove every registration matching all of the given criteria.

        Omitted criteria match anything, so ``off()`` removes everything and
        ``off("add")`` empties a single topic. Missing matches are ignored.
        """
        names = list(self._topics) if topics is None else _split_topics(topics)
        for name in names:
            current = self._topics.get(name)
            if not current:
                continue
            remaining = [l for l in current if not l.matches(callback, context)]
            if len(remaining) == len(current):
                continue
            if remaining:
                self._topics[name] = remaining
            else:
                del self._topics[name]
            logger.debug("Removed %d listener(s) from '%s'", len(current) - len(remaining), name)
        return self

    def trigger(self, topic: Union[str, Enum], params: Any = None, caller: Any = None) -> "EventDispatcher":
        """Deliver a fresh Event for ``topic`` to its current listeners."""
        name = _topic_name(topic)
        snapshot = self._topics.get(name, [])
        event: Event = Event(topic=name, params=params, caller=caller)
        if self.settings.trace_dispatch:
            logger.debug("Triggering '%s' to %d listener(s) with params: %s", name, len(snapshot), params)
        for listener in snapshot:
            if not self._is_registered(name, listener):
                continue
            if listener.once:
                self._discard(name, listener)
            listener.invoke(event)
            if event.is_stopped:
                logger.debug("Propagation of '%s' stopped by %s", name, listener.callback)
                break
        return self

    def reset(self) -> "EventDispatcher":
        """Discard all registrations on every topic."""
        self._topics = {}
        return self

    def listeners(self, topic: Union[str, Enum]) -> Tuple[Listener, ...]:
        return tuple(self._topics.get(_topic_name(topic), ()))

    def has_listeners(self, topic: Optional[Union[str, Enum]] = None) -> bool:
        if topic is None:
            return bool(self._topics)
        return bool(self._topics.get(_topic_name(topic)))

    def topics(self) -> List[str]:
        return list(self._topics)

    def _is_registered(self, name: str, listener: Listener) -> bool:
        return any(l is listener for l in self._topics.get(name, ()))

    def _discard(self, name: str, listener: Listener) -> None:
        remaining = [l for l in self._topics.get(name, ()) if l is not listener]
        if remaining:
            self._topics[name] = remaining
        else:
            self._topics.pop(name, None)
