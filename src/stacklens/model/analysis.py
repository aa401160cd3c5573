"""Analysis result model: everything one analysis pass learned about a document."""

from __future__ import annotations

from dataclasses import dataclass

from stacklens.model.diagnostic import Diagnostic
from stacklens.model.text import Range


@dataclass(frozen=True)
class StackingContextDeclaration:
    """A declaration that makes its rule establish a stacking context."""

    property: str
    value: str
    range: Range
    rule_range: Range | None = None  # None at the stylesheet root


@dataclass(frozen=True)
class AnalysisResult:
    """Ranges and diagnostics for one document version.

    ``property_ranges`` and ``contexts`` are parallel and in document order.
    ``rule_ranges`` holds each enclosing rule once, in first-seen order.
    """

    uri: str
    version: int = 0
    property_ranges: tuple[Range, ...] = ()
    rule_ranges: tuple[Range, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    contexts: tuple[StackingContextDeclaration, ...] = ()
