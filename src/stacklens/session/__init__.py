from stacklens.session.documents import DocumentStore
from stacklens.session.hover import Hover, hover_at
from stacklens.session.scheduler import AnalysisScheduler
from stacklens.session.session import Session

__all__ = ["AnalysisScheduler", "DocumentStore", "Hover", "Session", "hover_at"]
