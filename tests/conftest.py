"""Shared test fixtures for eventrelay."""

from __future__ import annotations

import logging
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from eventrelay.core.dispatcher import EventDispatcher
from eventrelay.emitter import EventEmitter
from eventrelay.models.dispatch import ErrorPolicy
from eventrelay.sinks.memory import RecordingSink


@pytest.fixture
def mock_logger() -> MagicMock:
    """Provide a logger double for asserting dispatcher log calls."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def dispatcher(mock_logger: MagicMock) -> EventDispatcher:
    """Provide a stopped dispatcher with an injected logger double."""
    return EventDispatcher(logger=mock_logger, error_policy=ErrorPolicy.PROPAGATE)


@pytest.fixture
def emitter() -> EventEmitter:
    """Provide a fresh in-process emitter."""
    return EventEmitter()


@pytest.fixture
def make_sinks() -> Callable[[int], list[RecordingSink]]:
    """Factory fixture: build ``n`` recording sinks named ``sink-<i>``."""

    def _factory(n: int) -> list[RecordingSink]:
        return [RecordingSink(f"sink-{i}") for i in range(n)]

    return _factory
