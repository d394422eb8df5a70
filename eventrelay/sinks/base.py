"""Closable sink base — shared ``"closed"`` notification for bundled sinks."""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable

from eventrelay.emitter import EventEmitter
from eventrelay.sinks import CLOSED_EVENT

logger = logging.getLogger(__name__)


class SinkClosedError(RuntimeError):
    """Raised when sending to a sink that has already been closed."""


class ClosableSink(abc.ABC):
    """Base for sinks that can be closed exactly once.

    Subclasses implement ``_deliver``.  ``close()`` marks the sink closed
    and emits ``"closed"`` the first time it is called; later calls do
    nothing.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._notifications = EventEmitter()
        self._closed = False

    @property
    def sink_name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def on(self, event: str, listener: Callable[..., Any]) -> ClosableSink:
        self._notifications.on(event, listener)
        return self

    def remove_listener(
        self, event: str, listener: Callable[..., Any]
    ) -> ClosableSink:
        self._notifications.remove_listener(event, listener)
        return self

    def send(self, event: str, *args: Any) -> None:
        if self._closed:
            raise SinkClosedError(f"Sink {self._name!r} is closed")
        self._deliver(event, args)

    @abc.abstractmethod
    def _deliver(self, event: str, args: tuple[Any, ...]) -> None:
        """Handle one event."""

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.debug("Sink %s closed", self._name)
        self._notifications.emit(CLOSED_EVENT)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
