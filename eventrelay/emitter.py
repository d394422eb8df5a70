"""In-process event emitter and the ``Emitter`` capability protocol.

The dispatcher only needs ``on`` and ``remove_listener`` from a source, so
any object providing them (a timer, a socket wrapper, an IPC channel) can
be connected.  ``EventEmitter`` is the reference implementation and is
also what the bundled sinks use for their ``"closed"`` notification.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

Listener = Callable[..., Any]


@runtime_checkable
class Emitter(Protocol):
    """Protocol for event sources connectable to a dispatcher."""

    def on(self, event: str, listener: Listener) -> Any:
        """Register *listener* for *event*."""
        ...

    def remove_listener(self, event: str, listener: Listener) -> Any:
        """Deregister *listener* from *event*."""
        ...


class _Registration:
    __slots__ = ("listener", "once")

    def __init__(self, listener: Listener, once: bool) -> None:
        self.listener = listener
        self.once = once


class EventEmitter:
    """Synchronous named-event emitter.

    Listeners run in registration order on the emitting thread.  A
    listener registered several times runs once per registration.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[_Registration]] = {}

    def on(self, event: str, listener: Listener) -> EventEmitter:
        """Register *listener* to run on every *event*."""
        self._listeners.setdefault(event, []).append(_Registration(listener, False))
        return self

    def once(self, event: str, listener: Listener) -> EventEmitter:
        """Register *listener* to run on the next *event* only."""
        self._listeners.setdefault(event, []).append(_Registration(listener, True))
        return self

    def remove_listener(self, event: str, listener: Listener) -> EventEmitter:
        """Remove the most recently added registration of *listener*.

        Unknown events or listeners are ignored.
        """
        registrations = self._listeners.get(event)
        if not registrations:
            return self

        for index in range(len(registrations) - 1, -1, -1):
            if registrations[index].listener == listener:
                del registrations[index]
                break

        if not registrations:
            del self._listeners[event]
        return self

    def remove_all_listeners(self, event: str | None = None) -> EventEmitter:
        """Drop every listener for *event*, or for all events."""
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)
        return self

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of *event* with *args*.

        Listeners added or removed while emitting take effect from the
        next ``emit``.  Returns ``True`` if the event had listeners.
        """
        registrations = list(self._listeners.get(event, ()))
        if not registrations:
            return False

        for registration in registrations:
            if registration.once:
                self._discard(event, registration)
            registration.listener(*args)

        return True

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def event_names(self) -> list[str]:
        return list(self._listeners)

    def _discard(self, event: str, registration: _Registration) -> None:
        registrations = self._listeners.get(event)
        if registrations and registration in registrations:
            registrations.remove(registration)
            if not registrations:
                del self._listeners[event]

    def __repr__(self) -> str:
        counts = {event: len(regs) for event, regs in self._listeners.items()}
        return f"EventEmitter(listeners={counts!r})"
