"""In-memory sinks — forward to a callable or record what was received."""

from __future__ import annotations

from typing import Any, Callable

from eventrelay.sinks.base import ClosableSink


class CallbackSink(ClosableSink):
    """Forwards every event to ``callback(event, *args)``.

    Parameters
    ----------
    callback:
        Invoked synchronously for each broadcast.  Exceptions propagate to
        the dispatcher.
    name:
        Human-readable identifier, used in logs and reports.
    """

    def __init__(
        self, callback: Callable[..., Any], name: str = "callback"
    ) -> None:
        super().__init__(name)
        self._callback = callback

    def _deliver(self, event: str, args: tuple[Any, ...]) -> None:
        self._callback(event, *args)


class RecordingSink(ClosableSink):
    """Keeps every received ``(event, args)`` pair in order."""

    def __init__(self, name: str = "recording") -> None:
        super().__init__(name)
        self.received: list[tuple[str, tuple[Any, ...]]] = []

    def _deliver(self, event: str, args: tuple[Any, ...]) -> None:
        self.received.append((event, args))

    def events(self) -> list[str]:
        """Return the received event names, in order."""
        return [event for event, _ in self.received]

    def clear(self) -> None:
        self.received.clear()
