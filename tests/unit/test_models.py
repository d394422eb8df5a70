"""Tests for eventrelay models — frozen Pydantic v2 records."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eventrelay.emitter import EventEmitter
from eventrelay.models import (
    BroadcastReport,
    DispatcherState,
    ErrorPolicy,
    RelayedEvent,
    SinkFailure,
    SourceBinding,
)


class TestSourceBinding:
    def test_keeps_emitter_reference(self):
        emitter = EventEmitter()
        binding = SourceBinding(emitter=emitter, handlers={"tick": print})

        assert binding.emitter is emitter
        assert binding.handlers["tick"] is print
        assert binding.event_names == ["tick"]

    def test_rejects_non_callable_handler(self):
        with pytest.raises(ValidationError):
            SourceBinding(emitter=EventEmitter(), handlers={"tick": "not callable"})

    def test_frozen(self):
        binding = SourceBinding(emitter=EventEmitter(), handlers={})
        with pytest.raises(ValidationError):
            binding.emitter = EventEmitter()

    def test_handlers_are_required(self):
        with pytest.raises(ValidationError):
            SourceBinding(emitter=EventEmitter())


class TestBroadcastReport:
    def test_ok_without_failures(self):
        assert BroadcastReport(event="e", attempted=2, delivered=2).ok is True

    def test_not_ok_with_failures(self):
        report = BroadcastReport(
            event="e",
            attempted=1,
            delivered=0,
            failures=[SinkFailure(index=0, sink_repr="s", error="RuntimeError: x")],
        )
        assert report.ok is False


class TestRelayedEvent:
    def test_from_call(self):
        record = RelayedEvent.from_call("e", (1.23, "ABC", None, False), sink_name="f")

        assert record.args == [1.23, "ABC", None, False]
        assert record.sink_name == "f"
        assert record.timestamp_utc.tzinfo is not None

    def test_from_call_with_unserializable_argument(self):
        marker = object()
        record = RelayedEvent.from_call("e", (marker,))

        assert record.args == [repr(marker)]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_from_call_with_non_finite_float(self, value):
        record = RelayedEvent.from_call("e", (value, 1.5))

        assert record.args == [repr(value), 1.5]


class TestEnums:
    def test_values(self):
        assert DispatcherState("running") is DispatcherState.RUNNING
        assert ErrorPolicy("log") is ErrorPolicy.LOG
