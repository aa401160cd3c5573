"""Quick fix model: single-edit corrections offered for a diagnostic."""

from __future__ import annotations

from dataclasses import dataclass

from stacklens.model.text import Position, Range, TextEdit

ISOLATION_DECLARATION = "isolation: isolate;"


@dataclass(frozen=True)
class InsertIsolationIsolate:
    """Insert ``isolation: isolate;`` on its own line before the flagged declaration."""

    insertion_point: Position
    text: str

    kind = "insert-isolation"
    title = "Add `isolation: isolate` to establish a stacking context"

    @property
    def edit(self) -> TextEdit:
        return TextEdit(Range(self.insertion_point, self.insertion_point), self.text)


@dataclass(frozen=True)
class RemoveDeclaration:
    """Delete the ineffective declaration."""

    delete_range: Range

    kind = "remove-declaration"
    title = "Remove ineffective `z-index` declaration"

    @property
    def edit(self) -> TextEdit:
        return TextEdit(self.delete_range, "")


QuickFix = InsertIsolationIsolate | RemoveDeclaration
