"""Hover query: which declaration or rule makes a stacking context at a position."""

from __future__ import annotations

from dataclasses import dataclass

from stacklens.model.analysis import AnalysisResult
from stacklens.model.text import Position, Range, TextDocument

DECLARATION_HOVER = "This property introduces a new stacking context"


@dataclass(frozen=True)
class Hover:
    range: Range
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"range": self.range.to_dict(), "contents": self.message}


def _at_end_of_line(document: TextDocument, position: Position) -> bool:
    # One character forward, clamped to the document, is empty only at the
    # end of a line.
    probe = Range(position, Position(position.line, position.character + 1))
    return document.validate_range(probe).is_empty


def hover_at(result: AnalysisResult, document: TextDocument, position: Position) -> Hover | None:
    """Return the hover for *position*, or None when nothing applies.

    The smallest establishing declaration containing the position wins.
    Past the end of a highlighted line, the hover covers the enclosing rule.
    """
    containing = [c for c in result.contexts if c.range.contains(position)]
    if containing:
        smallest = min(containing, key=lambda c: c.range.size_key())
        return Hover(smallest.range, DECLARATION_HOVER)

    if not _at_end_of_line(document, position):
        return None
    for context in result.contexts:
        if context.range.end.line == position.line:
            return Hover(
                context.rule_range or context.range,
                f"This rule establishes a new stacking context "
                f"({context.property}: {context.value})",
            )
    return None
