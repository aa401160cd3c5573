"""Event system: bus and the inbound/outbound event types of a session."""

from stacklens.events.bus import EventBus
from stacklens.events.types import (
    ActiveEditorChanged,
    AnalysisFailed,
    AnalysisUpdated,
    DocumentChanged,
    DocumentClosed,
    DocumentForgotten,
    DocumentOpened,
    InboundEvent,
    SchedulingOverrun,
    VisibleEditorsChanged,
)

__all__ = [
    "EventBus",
    "ActiveEditorChanged",
    "AnalysisFailed",
    "AnalysisUpdated",
    "DocumentChanged",
    "DocumentClosed",
    "DocumentForgotten",
    "DocumentOpened",
    "InboundEvent",
    "SchedulingOverrun",
    "VisibleEditorsChanged",
]
