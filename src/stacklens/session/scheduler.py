"""Incremental re-analysis: debounce editor events and keep per-document results fresh."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from stacklens.analysis import analyze
from stacklens.config import StacklensConfig
from stacklens.events import types as events
from stacklens.events.bus import EventBus
from stacklens.model.analysis import AnalysisResult
from stacklens.parser import ParseError
from stacklens.session.documents import DocumentStore

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class EventLoop(Protocol):
    """The part of an asyncio loop the scheduler needs."""

    def time(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


@dataclass
class _PendingRun:
    uris: frozenset[str]
    first_trigger: float
    handle: TimerHandle
    forced: bool = False  # delay was cut short by the max-wait deadline


class AnalysisScheduler:
    """Owns the uri -> AnalysisResult cache and decides when to re-analyze.

    Triggers for the same set of documents are coalesced with a trailing-edge
    debounce. A hard max-wait deadline, counted from the first coalesced
    trigger, forces a run under continuous typing. Runs execute on the host
    loop and are never preempted once started.
    """

    def __init__(
        self,
        documents: DocumentStore,
        config: StacklensConfig | None = None,
        bus: EventBus | None = None,
        *,
        loop: EventLoop | None = None,
    ) -> None:
        self.documents = documents
        self.config = config or StacklensConfig()
        self.bus = bus or EventBus()
        self._loop = loop
        self._results: dict[str, AnalysisResult] = {}
        self._failed_versions: dict[str, int] = {}
        self._reopened: set[str] = set()
        self._pending: dict[frozenset[str], _PendingRun] = {}
        self.runs = 0

    @property
    def loop(self) -> EventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    # --- reads ------------------------------------------------------------------

    def result(self, uri: str) -> AnalysisResult | None:
        """The latest complete result for *uri*, if any."""
        return self._results.get(uri)

    @property
    def pending(self) -> list[frozenset[str]]:
        return list(self._pending)

    # --- event intake -----------------------------------------------------------

    def schedule(self, event: events.InboundEvent) -> None:
        """Apply an inbound event and coalesce the re-analysis it calls for."""
        uris = self._affected_by(event)
        if uris:
            self._debounce(frozenset(uris))

    def _affected_by(self, event: events.InboundEvent) -> set[str]:
        if isinstance(event, events.DocumentOpened):
            self.documents.open(event.uri, event.text, event.version)
            self._failed_versions.pop(event.uri, None)
            # A reopened document may restart at an already-seen version.
            if event.uri in self._results:
                self._reopened.add(event.uri)
            return {event.uri}
        if isinstance(event, events.DocumentChanged):
            if self.documents.update(event.uri, event.text, event.version) is None:
                return set()
            return {event.uri}
        if isinstance(event, events.DocumentClosed):
            self._forget(event.uri)
            return set()
        if isinstance(event, events.VisibleEditorsChanged):
            self.documents.visible = tuple(event.uris)
            return {uri for uri in event.uris if self._needs_analysis(uri)}
        if isinstance(event, events.ActiveEditorChanged):
            self.documents.active = event.uri
            if event.uri is not None and self._needs_analysis(event.uri):
                return {event.uri}
            return set()
        raise TypeError(f"Unsupported event: {event!r}")

    def _needs_analysis(self, uri: str) -> bool:
        document = self.documents.get(uri)
        if document is None:
            return False
        if self._failed_versions.get(uri) == document.version:
            return False
        if uri in self._reopened:
            return True
        result = self._results.get(uri)
        return result is None or result.version < document.version

    # --- debounce ---------------------------------------------------------------

    def _debounce(self, key: frozenset[str]) -> None:
        now = self.loop.time()
        window = self.config.debounce_ms / 1000.0
        max_wait = self.config.max_wait_ms / 1000.0

        pending = self._pending.pop(key, None)
        if pending is not None:
            pending.handle.cancel()
            first = pending.first_trigger
        else:
            first = now

        remaining = first + max_wait - now
        if remaining <= 0:
            self._run_batch(key, first, forced=True)
            return
        delay = min(window, remaining)
        handle = self.loop.call_later(delay, self._fire, key)
        self._pending[key] = _PendingRun(key, first, handle, forced=remaining < window)

    def _fire(self, key: frozenset[str]) -> None:
        pending = self._pending.pop(key, None)
        if pending is None:
            return
        self._run_batch(key, pending.first_trigger, forced=pending.forced)

    def _run_batch(self, key: frozenset[str], first_trigger: float, *, forced: bool) -> None:
        if forced:
            waited_ms = (self.loop.time() - first_trigger) * 1000.0
            logger.debug("Max wait reached after %.0fms for %s", waited_ms, sorted(key))
            self.bus.emit(events.SchedulingOverrun(uris=tuple(sorted(key)), waited_ms=waited_ms))
        for uri in sorted(key):
            self._run(uri)

    def flush(self) -> None:
        """Run every pending batch now."""
        for key in list(self._pending):
            pending = self._pending.pop(key)
            pending.handle.cancel()
            self._run_batch(key, pending.first_trigger, forced=False)

    def close(self) -> None:
        """Cancel all pending runs."""
        for pending in self._pending.values():
            pending.handle.cancel()
        self._pending.clear()

    # --- analysis ---------------------------------------------------------------

    def _run(self, uri: str) -> None:
        document = self.documents.get(uri)
        if document is None:
            logger.debug("Skipping %s: document was closed", uri)
            return
        if not self._needs_analysis(uri):
            return
        self.runs += 1
        try:
            result = analyze(
                document.text,
                uri,
                document.version,
                help_uri=self.config.help_uri,
                source=self.config.diagnostic_source,
            )
        except ParseError as exc:
            logger.warning("Keeping previous analysis of %s: %s", uri, exc)
            self._fail(uri, document.version, str(exc))
            return
        except Exception as exc:
            logger.exception("Analysis of %s failed", uri)
            self._fail(uri, document.version, str(exc))
            return
        self._store(result)

    def _fail(self, uri: str, version: int, error: str) -> None:
        self._failed_versions[uri] = version
        self.bus.emit(events.AnalysisFailed(uri=uri, version=version, error=error))

    def _store(self, result: AnalysisResult) -> bool:
        """Replace the cached result unless it was computed from newer input."""
        current = self._results.get(result.uri)
        reopened = result.uri in self._reopened
        if current is not None and current.version > result.version and not reopened:
            logger.debug(
                "Discarding stale result for %s (v%d < v%d)",
                result.uri,
                result.version,
                current.version,
            )
            return False
        self._results[result.uri] = result
        self._failed_versions.pop(result.uri, None)
        self._reopened.discard(result.uri)
        self.bus.emit(events.AnalysisUpdated(uri=result.uri, result=result))
        return True

    def _forget(self, uri: str) -> None:
        self.documents.close(uri)
        self._results.pop(uri, None)
        self._failed_versions.pop(uri, None)
        self._reopened.discard(uri)
        pending = self._pending.pop(frozenset({uri}), None)
        if pending is not None:
            pending.handle.cancel()
        self.bus.emit(events.DocumentForgotten(uri=uri))
