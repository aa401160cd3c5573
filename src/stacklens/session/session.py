"""Session: the object an editor integration holds for one workspace."""

from __future__ import annotations

from stacklens.config import StacklensConfig
from stacklens.events.bus import EventBus
from stacklens.events.types import InboundEvent
from stacklens.fixes import generate_fixes
from stacklens.model.analysis import AnalysisResult
from stacklens.model.diagnostic import Diagnostic
from stacklens.model.fix import QuickFix
from stacklens.model.text import Position
from stacklens.session.documents import DocumentStore
from stacklens.session.hover import Hover, hover_at
from stacklens.session.scheduler import AnalysisScheduler, EventLoop


class Session:
    """Event intake, result lookups, hover and quick fixes for open documents.

    Inbound events go through :meth:`push`; results come back as
    ``AnalysisUpdated`` / ``AnalysisFailed`` events on :attr:`bus`.
    """

    def __init__(
        self,
        config: StacklensConfig | None = None,
        *,
        loop: EventLoop | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config or StacklensConfig()
        self.bus = bus or EventBus()
        self.documents = DocumentStore()
        self.scheduler = AnalysisScheduler(self.documents, self.config, self.bus, loop=loop)

    def push(self, event: InboundEvent) -> None:
        self.scheduler.schedule(event)

    def result(self, uri: str) -> AnalysisResult | None:
        return self.scheduler.result(uri)

    def diagnostics(self, uri: str) -> list[dict[str, object]]:
        """Diagnostics for *uri* in publishable form (empty if not analyzed)."""
        result = self.result(uri)
        if result is None:
            return []
        return [d.to_dict() for d in result.diagnostics]

    def hover(self, uri: str, position: Position) -> Hover | None:
        result = self.result(uri)
        document = self.documents.get(uri)
        if result is None or document is None:
            return None
        return hover_at(result, document, position)

    def quick_fixes(self, uri: str, diagnostic: Diagnostic) -> list[QuickFix]:
        if uri not in self.documents:
            raise KeyError(f"Document is not open: {uri}")
        return generate_fixes(diagnostic, self.documents.get(uri).text)  # type: ignore[union-attr]

    def flush(self) -> None:
        self.scheduler.flush()

    def close(self) -> None:
        self.scheduler.close()
