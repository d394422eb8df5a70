"""Dispatcher models — run state, error policy, bindings and fan-out reports."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict


class DispatcherState(str, Enum):
    """The two states of the dispatcher lifecycle."""

    STOPPED = "stopped"
    RUNNING = "running"


class ErrorPolicy(str, Enum):
    """What ``broadcast()`` does when a sink's ``send`` raises."""

    PROPAGATE = "propagate"  # Deliver to the rest, then raise BroadcastError
    LOG = "log"  # Deliver to the rest, log and report only


class SourceBinding(BaseModel):
    """A connected emitter and its event-name-to-handler mapping.

    The emitter is held by reference.  The handler mapping is copied on
    construction, so the exact callbacks registered by ``start()`` are the
    ones ``stop()`` removes even if the caller mutates its own dict.
    """

    model_config = ConfigDict(frozen=True)

    emitter: Any
    handlers: dict[str, Callable[..., Any]]

    @property
    def event_names(self) -> list[str]:
        return list(self.handlers)


class SinkFailure(BaseModel):
    """A single sink's failure during a broadcast."""

    model_config = ConfigDict(frozen=True)

    index: int  # position of the sink in the attachment order
    sink_repr: str
    error: str


class BroadcastReport(BaseModel):
    """Outcome of one ``broadcast()`` fan-out."""

    model_config = ConfigDict(frozen=True)

    event: str
    attempted: int = 0
    delivered: int = 0
    failures: list[SinkFailure] = []

    @property
    def ok(self) -> bool:
        """Whether every attempted sink accepted the event."""
        return not self.failures
