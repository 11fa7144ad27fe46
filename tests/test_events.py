"""Tests for change events and event bubbling."""

import pytest

from dom_keyframes.events import EventEmitter, bubble_event, create_change_event


def test_emit_calls_listeners_in_registration_order():
    emitter = EventEmitter()
    calls = []
    emitter.on("change", lambda value: calls.append(("first", value)))
    emitter.on("change", lambda value: calls.append(("second", value)))

    assert emitter.emit("change", 1)
    assert calls == [("first", 1), ("second", 1)]
    assert not emitter.emit("other")


def test_once_and_off():
    emitter = EventEmitter()
    calls = []
    emitter.once("ping", calls.append)
    listener = emitter.on("pong", calls.append)

    emitter.emit("ping", 1)
    emitter.emit("ping", 2)
    emitter.off("pong", listener)
    emitter.emit("pong", 3)

    assert calls == [1]
    assert emitter.listener_count("ping") == 0
    assert emitter.event_names() == ()


def test_clear_removes_selected_events():
    emitter = EventEmitter()
    emitter.on("a", print)
    emitter.on("b", print)

    emitter.clear(["a"])
    assert emitter.event_names() == ("b",)

    emitter.clear()
    assert emitter.event_names() == ()


def test_bubble_event_forwards_arguments_to_scope():
    source = EventEmitter()
    scope = EventEmitter()
    received = []
    scope.on("timeline:change", lambda *args: received.append(args))

    source.on("change", bubble_event("timeline:change", scope))
    source.emit("change", "payload", 2)

    assert received == [("payload", 2)]


@pytest.mark.parametrize("scope", [None, {}, object()])
def test_bubble_event_requires_an_emitter(scope):
    with pytest.raises(TypeError, match="Scope needs to be an event emitter."):
        bubble_event("change", scope)


def test_create_change_event():
    event = create_change_event({"path": "a[1]"}, {"path": "b[1]"}, "path", "a[1]", "b[1]")

    assert event.previous == {"path": "a[1]"}
    assert event.current == {"path": "b[1]"}
    assert event.changed == {"type": "path", "from": "a[1]", "to": "b[1]"}
