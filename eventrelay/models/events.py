"""Relayed event record — the serialized form written by file sinks."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _jsonable(value: Any) -> Any:
    """Return *value* if it is strict JSON (no NaN or infinity), else its ``repr``."""
    try:
        json.dumps(value, allow_nan=False)
    except (TypeError, ValueError):
        return repr(value)
    return value


class RelayedEvent(BaseModel):
    """One event as received by a sink."""

    model_config = ConfigDict(frozen=True)

    event: str
    args: list[Any] = []
    sink_name: str = ""
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @classmethod
    def from_call(
        cls, event: str, args: tuple[Any, ...], *, sink_name: str = ""
    ) -> RelayedEvent:
        """Build a record from ``send(event, *args)`` call arguments.

        Arguments that cannot be represented in JSON are stored as their
        ``repr`` so that a record can always be written.
        """
        return cls(
            event=event,
            args=[_jsonable(arg) for arg in args],
            sink_name=sink_name,
        )
