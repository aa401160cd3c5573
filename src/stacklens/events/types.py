"""Event types flowing into and out of an analysis session."""

from __future__ import annotations

from dataclasses import dataclass

from stacklens.model.analysis import AnalysisResult


# ---------------------------------------------------------------------------
# Inbound: pushed by the editor integration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentOpened:
    uri: str
    text: str
    version: int = 0


@dataclass(frozen=True)
class DocumentChanged:
    """A new full text for an open document."""

    uri: str
    text: str
    version: int


@dataclass(frozen=True)
class DocumentClosed:
    uri: str


@dataclass(frozen=True)
class VisibleEditorsChanged:
    uris: tuple[str, ...]


@dataclass(frozen=True)
class ActiveEditorChanged:
    uri: str | None


InboundEvent = (
    DocumentOpened
    | DocumentChanged
    | DocumentClosed
    | VisibleEditorsChanged
    | ActiveEditorChanged
)


# ---------------------------------------------------------------------------
# Outbound: emitted on the session's EventBus
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisUpdated:
    uri: str
    result: AnalysisResult


@dataclass(frozen=True)
class AnalysisFailed:
    """Analysis of a document version failed; the previous result is kept."""

    uri: str
    version: int
    error: str


@dataclass(frozen=True)
class SchedulingOverrun:
    """Continuous triggering hit the max-wait ceiling and forced a run."""

    uris: tuple[str, ...]
    waited_ms: float


@dataclass(frozen=True)
class DocumentForgotten:
    uri: str
