"""eventrelay data models — Pydantic v2, frozen (immutable)."""

from eventrelay.models.dispatch import (
    BroadcastReport,
    DispatcherState,
    ErrorPolicy,
    SinkFailure,
    SourceBinding,
)
from eventrelay.models.events import RelayedEvent

__all__ = [
    # dispatch
    "BroadcastReport",
    "DispatcherState",
    "ErrorPolicy",
    "SinkFailure",
    "SourceBinding",
    # events
    "RelayedEvent",
]
