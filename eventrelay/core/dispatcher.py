"""EventDispatcher — relays source emitter events to attached sinks.

Sources are connected as ``(emitter, handlers)`` bindings while the
dispatcher is stopped.  ``start()`` registers every handler with its
emitter and ``stop()`` removes exactly those registrations, so handlers
are live if and only if the dispatcher is running.

Sinks can be attached and detached at any time.  Every ``broadcast()``
reaches the sinks attached when the call begins and still attached when
their turn comes: a sink attached by another sink's ``send`` misses the
current event, and a sink detached or closed during the fan-out is skipped.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Mapping

from eventrelay.config import settings
from eventrelay.emitter import Emitter
from eventrelay.models.dispatch import (
    BroadcastReport,
    DispatcherState,
    ErrorPolicy,
    SinkFailure,
    SourceBinding,
)
from eventrelay.sinks import CLOSED_EVENT, Sink

LifecycleHook = Callable[["EventDispatcher"], "Awaitable[None] | None"]


class InvalidStateError(RuntimeError):
    """Raised when an operation is not allowed while the dispatcher is running."""


class BroadcastError(RuntimeError):
    """Raised after a fan-out in which one or more sinks failed.

    Every sink still attached has been attempted by the time this is raised.
    """

    def __init__(self, report: BroadcastReport, errors: list[Exception]) -> None:
        self.report = report
        self.errors = errors
        details = "; ".join(
            f"#{failure.index} {failure.sink_repr}: {failure.error}"
            for failure in report.failures
        )
        super().__init__(
            f"{len(report.failures)}/{report.attempted} sinks failed for "
            f"event {report.event!r}: {details}"
        )


class _Attachment:
    """One attachment of a sink plus its ``"closed"`` subscription."""

    __slots__ = ("sink", "on_closed")

    def __init__(self, sink: Sink) -> None:
        self.sink = sink
        self.on_closed: Callable[..., None] | None = None


class EventDispatcher:
    """Fans out events to attached sinks and manages source bindings.

    Parameters
    ----------
    logger:
        Logger for lifecycle warnings and sink failures.  Defaults to this
        module's logger.
    error_policy:
        How ``broadcast()`` reports sink failures.  Defaults to
        ``settings.error_policy``.
    pre_start, post_start, pre_stop, post_stop:
        Optional hooks called with the dispatcher around a real state
        transition.  A hook may be a plain function or a coroutine
        function.  Hooks do not run for redundant start/stop calls.

    Usage
    -----
    >>> dispatcher = EventDispatcher()
    >>> dispatcher.connect(ticker, {"tick": on_tick})
    >>> dispatcher.attach(window)
    >>> await dispatcher.start()
    >>> dispatcher.broadcast("status", "ready")
    """

    def __init__(
        self,
        *,
        logger: logging.Logger | None = None,
        error_policy: ErrorPolicy | None = None,
        pre_start: LifecycleHook | None = None,
        post_start: LifecycleHook | None = None,
        pre_stop: LifecycleHook | None = None,
        post_stop: LifecycleHook | None = None,
    ) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._error_policy = ErrorPolicy(error_policy or settings.error_policy)
        self._pre_start = pre_start
        self._post_start = post_start
        self._pre_stop = pre_stop
        self._post_stop = post_stop

        self._attachments: list[_Attachment] = []
        self._bindings: list[SourceBinding] = []
        self._running = False

    # ------------------------------------------------------------------
    # Sinks
    # ------------------------------------------------------------------

    def attach(self, sink: Sink) -> None:
        """Attach *sink* so it receives every subsequent broadcast.

        The same sink may be attached more than once; it then receives
        each event once per attachment.  The sink is detached
        automatically when it emits ``"closed"``.
        """
        attachment = _Attachment(sink)

        def on_closed(*_: Any) -> None:
            self._release(attachment)

        attachment.on_closed = on_closed
        self._attachments.append(attachment)
        sink.on(CLOSED_EVENT, on_closed)
        self._logger.debug("Attached sink %r", sink)

    def detach(self, sink: Sink) -> None:
        """Detach the first attachment of *sink*.

        Detaching a sink that is not attached does nothing.
        """
        for attachment in self._attachments:
            if attachment.sink is sink:
                self._release(attachment)
                return

    def _release(self, attachment: _Attachment) -> None:
        if attachment not in self._attachments:
            return
        self._attachments.remove(attachment)
        attachment.sink.remove_listener(CLOSED_EVENT, attachment.on_closed)
        self._logger.debug("Detached sink %r", attachment.sink)

    @property
    def sinks(self) -> list[Sink]:
        """Return a copy of the attached sinks, in attachment order."""
        return [attachment.sink for attachment in self._attachments]

    # ------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------

    def broadcast(self, event: str, *args: Any) -> BroadcastReport:
        """Send *event* with *args* to every attached sink, in order.

        A failing sink does not stop delivery to the remaining sinks.
        Under ``ErrorPolicy.PROPAGATE`` a ``BroadcastError`` is raised once
        all sinks have been attempted; under ``ErrorPolicy.LOG`` the
        failures are only logged and returned in the report.

        Sinks released during the fan-out (by ``detach`` or by closing)
        are skipped and not counted as attempted.
        """
        failures: list[SinkFailure] = []
        errors: list[Exception] = []
        attempted = 0

        for index, attachment in enumerate(list(self._attachments)):
            if attachment not in self._attachments:
                continue
            sink = attachment.sink
            attempted += 1
            try:
                sink.send(event, *args)
            except Exception as exc:  # noqa: BLE001
                self._logger.error(
                    "Sink %r failed for event %r: %s", sink, event, exc
                )
                failures.append(
                    SinkFailure(
                        index=index,
                        sink_repr=repr(sink),
                        error=f"{type(exc).__name__}: {exc}",
                    )
                )
                errors.append(exc)

        report = BroadcastReport(
            event=event,
            attempted=attempted,
            delivered=attempted - len(failures),
            failures=failures,
        )

        if errors and self._error_policy is ErrorPolicy.PROPAGATE:
            raise BroadcastError(report, errors) from errors[0]

        return report

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def connect(
        self, emitter: Emitter, handlers: Mapping[str, Callable[..., Any]]
    ) -> None:
        """Declare *handlers* to be registered on *emitter* while running.

        Raises
        ------
        InvalidStateError
            If the dispatcher is running.
        """
        if self._running:
            raise InvalidStateError(
                "connecting emitter handlers to a running dispatcher"
            )

        self._bindings.append(SourceBinding(emitter=emitter, handlers=dict(handlers)))
        self._logger.debug(
            "Connected %r with events %s", emitter, sorted(handlers)
        )

    def disconnect(self, emitter: Emitter) -> None:
        """Remove the first binding connected for *emitter*.

        Disconnecting an unknown emitter does nothing.

        Raises
        ------
        InvalidStateError
            If the dispatcher is running.
        """
        if self._running:
            raise InvalidStateError(
                "disconnecting emitter handlers from a running dispatcher"
            )

        for index, binding in enumerate(self._bindings):
            if binding.emitter is emitter:
                del self._bindings[index]
                self._logger.debug("Disconnected %r", emitter)
                return

    @property
    def bindings(self) -> list[SourceBinding]:
        """Return a copy of the connected source bindings."""
        return list(self._bindings)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Register every connected handler and enter the running state.

        Starting a running dispatcher logs a warning and does nothing.
        """
        if self._running:
            self._logger.warning(
                "the `%s` dispatcher is already running", type(self).__name__
            )
            return

        await self._run_hook(self._pre_start)

        for binding in self._bindings:
            for event, handler in binding.handlers.items():
                binding.emitter.on(event, handler)

        self._running = True
        self._logger.debug("%s started", type(self).__name__)

        await self._run_hook(self._post_start)

    async def stop(self) -> None:
        """Deregister every connected handler and enter the stopped state.

        Stopping a dispatcher that is not running logs a warning and does
        nothing.
        """
        if not self._running:
            self._logger.warning(
                "unable to stop the `%s`, the dispatcher is not running",
                type(self).__name__,
            )
            return

        await self._run_hook(self._pre_stop)

        for binding in self._bindings:
            for event, handler in binding.handlers.items():
                binding.emitter.remove_listener(event, handler)

        self._running = False
        self._logger.debug("%s stopped", type(self).__name__)

        await self._run_hook(self._post_stop)

    async def restart(self) -> None:
        """Sequentially stop then start the dispatcher."""
        await self.stop()
        await self.start()

    def is_running(self) -> bool:
        return self._running

    @property
    def state(self) -> DispatcherState:
        return DispatcherState.RUNNING if self._running else DispatcherState.STOPPED

    async def _run_hook(self, hook: LifecycleHook | None) -> None:
        if hook is None:
            return
        result = hook(self)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(state={self.state.value!r}, "
            f"sinks={len(self._attachments)}, bindings={len(self._bindings)})"
        )
