"""Sink protocol for eventrelay broadcasts.

A sink is anything that can receive ``send(event, *args)`` calls and that
signals a single ``"closed"`` notification when it goes away.  The
dispatcher subscribes to that notification on ``attach`` so closed sinks
are detached automatically.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

CLOSED_EVENT = "closed"


@runtime_checkable
class Sink(Protocol):
    """Protocol that every broadcast target must implement."""

    def send(self, event: str, *args: Any) -> Any:
        """Receive one broadcast event with its arguments."""
        ...

    def on(self, event: str, listener: Callable[..., Any]) -> Any:
        """Subscribe to a sink notification (the dispatcher uses ``"closed"``)."""
        ...

    def remove_listener(self, event: str, listener: Callable[..., Any]) -> Any:
        """Cancel a subscription made with ``on``."""
        ...
