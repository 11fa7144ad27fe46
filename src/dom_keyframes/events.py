"""Explicit change notification through observer lists."""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

Listener = Callable[..., None]


@dataclass(frozen=True)
class ChangeEvent:
    """A single state change published by a model setter.

    ``previous`` and ``current`` are full model snapshots taken before and
    after the change; ``type``/``from_value``/``to_value`` describe the field.
    """

    type: str
    from_value: Any
    to_value: Any
    previous: dict[str, Any] = field(default_factory=dict)
    current: dict[str, Any] = field(default_factory=dict)

    @property
    def changed(self) -> dict[str, Any]:
        return {"type": self.type, "from": self.from_value, "to": self.to_value}


class EventEmitter:
    """Minimal named-event observer list."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Listener:
        self._listeners.setdefault(event, []).append(listener)
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        def wrapper(*args: Any) -> None:
            self.off(event, wrapper)
            listener(*args)

        return self.on(event, wrapper)

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            self._listeners.pop(event, None)

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener registered for ``event``; True if any ran."""
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def event_names(self) -> tuple[str, ...]:
        return tuple(self._listeners.keys())

    def clear(self, events: Iterable[str] | None = None) -> None:
        """Remove listeners for the given events, or for every event."""
        names = list(self.event_names() if events is None else events)
        for name in names:
            self._listeners.pop(name, None)


def bubble_event(event: str, scope: EventEmitter) -> Listener:
    """Return a listener that re-emits its arguments as ``event`` on ``scope``."""
    if not isinstance(scope, EventEmitter):
        raise TypeError("Scope needs to be an event emitter.")

    def forward(*args: Any) -> None:
        scope.emit(event, *args)

    return forward


def create_change_event(
    previous: dict[str, Any],
    current: dict[str, Any],
    change_type: str,
    from_value: Any,
    to_value: Any,
) -> ChangeEvent:
    """Build a ChangeEvent from before/after model snapshots."""
    return ChangeEvent(
        type=change_type,
        from_value=from_value,
        to_value=to_value,
        previous=previous,
        current=current,
    )
