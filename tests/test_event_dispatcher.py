import logging

import pytest

from observable_collections import configure
from observable_collections.events import CollectionEvent, Event, EventDispatcher, Listener


def test_on_and_trigger_invokes_every_time():
    d = EventDispatcher()
    calls = []
    d.on("x", calls.append)

    d.trigger("x")
    d.trigger("x")

    assert len(calls) == 2
    assert all(isinstance(e, Event) for e in calls)
    assert calls[0] is not calls[1]


def test_once_listener_fires_exactly_once():
    d = EventDispatcher()
    calls = []
    d.once("x", calls.append)

    d.trigger("x")
    d.trigger("x")

    assert len(calls) == 1
    assert not d.has_listeners("x")


def test_envelope_carries_topic_params_and_caller():
    d = EventDispatcher()
    seen = []
    d.on("x", seen.append)
    owner = object()

    d.trigger("x", {"value": 1}, owner)

    evt = seen[0]
    assert evt.topic == "x"
    assert evt.params == {"value": 1}
    assert evt.caller is owner
    assert evt.is_stopped is False


def test_delivery_follows_registration_order():
    d = EventDispatcher()
    order = []
    d.on("x", lambda e: order.append("a"))
    d.on("x", lambda e: order.append("b"))
    d.on("x", lambda e: order.append("c"))

    d.trigger("x")

    assert order == ["a", "b", "c"]


def test_multiple_topics_in_one_registration():
    d = EventDispatcher()
    topics = []
    handle = d.on("add change,  remove", lambda e: topics.append(e.topic))

    d.trigger("add").trigger("change").trigger("remove").trigger("clear")

    assert topics == ["add", "change", "remove"]
    assert isinstance(handle, Listener)
    assert d.listeners("add") == (handle,)
    assert sorted(d.topics()) == ["add", "change", "remove"]


def test_enum_and_string_topics_are_interchangeable():
    d = EventDispatcher()
    topics = []
    d.on(CollectionEvent.ADD, lambda e: topics.append(e.topic))
    d.on([CollectionEvent.CHANGE, "clear"], lambda e: topics.append(e.topic))

    d.trigger("add")
    d.trigger(CollectionEvent.CHANGE)
    d.trigger(CollectionEvent.CLEAR)

    assert topics == ["add", "change", "clear"]


def test_callback_must_be_callable():
    d = EventDispatcher()
    with pytest.raises(TypeError):
        d.on("x", "not callable")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        d.on(" , ", lambda e: None)


def test_context_is_passed_as_receiver():
    d = EventDispatcher()

    class View:
        def __init__(self):
            self.seen = []

    view = View()

    def handler(self, event):
        self.seen.append(event.topic)

    d.on("x", handler, context=view)
    d.trigger("x")

    assert view.seen == ["x"]


def test_off_by_callback_topic_and_context():
    d = EventDispatcher()
    calls = []

    def a(e):
        calls.append("a")

    def b(e):
        calls.append("b")

    ctx = object()
    d.on("x y", a)
    d.on("x", b)
    d.on("y", lambda self, e: calls.append("ctx"), context=ctx)

    d.off("x", a)
    d.trigger("x")
    assert calls == ["b"]

    calls.clear()
    d.off(context=ctx)
    d.trigger("y")
    assert calls == ["a"]

    calls.clear()
    d.off(callback=a)
    d.trigger("y")
    assert calls == []
    assert d.topics() == ["x"]


def test_off_without_arguments_removes_everything_and_ignores_misses():
    d = EventDispatcher()
    d.on("x y", lambda e: None)

    d.off("missing", lambda e: None)
    assert d.has_listeners()

    d.off()
    assert not d.has_listeners()


def test_off_matches_bound_methods_fetched_again():
    d = EventDispatcher()

    class Sink:
        def __init__(self):
            self.count = 0

        def handle(self, e):
            self.count += 1

    sink = Sink()
    d.on("x", sink.handle)
    d.off("x", sink.handle)
    d.trigger("x")

    assert sink.count == 0


def test_off_with_listener_handle_removes_only_that_registration():
    d = EventDispatcher()
    calls = []

    def cb(e):
        calls.append(e.topic)

    first = d.on("x", cb)
    d.on("x", cb)
    d.off("x", first)
    d.trigger("x")

    assert calls == ["x"]


def test_stop_prevents_later_listeners():
    d = EventDispatcher()
    order = []

    def stopper(e):
        order.append("stopper")
        e.stop()

    d.on("x", lambda e: order.append("first"))
    d.on("x", stopper)
    d.on("x", lambda e: order.append("never"))

    d.trigger("x")
    assert order == ["first", "stopper"]

    # next pass gets a fresh envelope
    order.clear()
    d.trigger("x")
    assert order == ["first", "stopper"]


def test_listener_added_during_pass_waits_for_next_pass():
    d = EventDispatcher()
    calls = []

    def late(e):
        calls.append("late")

    def adder(e):
        calls.append("adder")
        d.on("x", late)

    d.on("x", adder)
    d.trigger("x")
    assert calls == ["adder"]

    # the second registration of `late` made during this pass is not in its snapshot
    calls.clear()
    d.trigger("x")
    assert calls == ["adder", "late"]
    assert len(d.listeners("x")) == 3


def test_listener_removed_during_pass_is_skipped_but_earlier_ones_run():
    d = EventDispatcher()
    calls = []

    def victim(e):
        calls.append("victim")

    def remover(e):
        calls.append("remover")
        d.off("x", victim)

    d.on("x", lambda e: calls.append("before"))
    d.on("x", remover)
    d.on("x", victim)

    d.trigger("x")

    assert calls == ["before", "remover"]


def test_once_listener_survives_reentrant_trigger_exactly_once():
    d = EventDispatcher()
    calls = []

    def reenter(e):
        if e.params == "outer":
            d.trigger("x", "inner")

    d.on("x", reenter)
    d.once("x", lambda e: calls.append(e.params))

    d.trigger("x", "outer")

    assert calls == ["inner"]
    assert len(d.listeners("x")) == 1


def test_listener_exception_propagates_and_aborts_pass():
    d = EventDispatcher()
    calls = []

    def boom(e):
        raise RuntimeError("listener failed")

    d.on("x", boom)
    d.on("x", calls.append)

    with pytest.raises(RuntimeError):
        d.trigger("x")
    assert calls == []


def test_reset_discards_all_topics():
    d = EventDispatcher()
    calls = []
    d.on("x y", calls.append)

    assert d.reset() is d
    d.trigger("x").trigger("y")

    assert calls == []
    assert d.topics() == []


def test_trace_dispatch_logs_triggers(caplog):
    configure(trace_dispatch=True)
    d = EventDispatcher()
    d.on("x", lambda e: None)

    with caplog.at_level(logging.DEBUG, logger="observable_collections"):
        d.trigger("x", 42)

    assert any("Triggering 'x'" in r.getMessage() for r in caplog.records)
