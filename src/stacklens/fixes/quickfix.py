"""Quick fixes for ineffective z-index diagnostics."""

from __future__ import annotations

import re

from stacklens.model.diagnostic import INEFFECTIVE_Z_INDEX, Diagnostic
from stacklens.model.fix import (
    ISOLATION_DECLARATION,
    InsertIsolationIsolate,
    QuickFix,
    RemoveDeclaration,
)
from stacklens.model.text import Position, Range, TextDocument

_INDENT_RE = re.compile(r"[ \t]*")


def insert_isolation_fix(diagnostic: Diagnostic, document: TextDocument) -> InsertIsolationIsolate:
    """Put ``isolation: isolate;`` on a new line above the flagged declaration."""
    start = diagnostic.range.start
    line = document.line_text(start.line) if start.line < document.line_count else ""
    indentation = _INDENT_RE.match(line).group(0)  # type: ignore[union-attr]
    return InsertIsolationIsolate(
        insertion_point=start,
        text=ISOLATION_DECLARATION + document.eol + indentation,
    )


def remove_declaration_fix(diagnostic: Diagnostic, document: TextDocument) -> RemoveDeclaration:
    """Delete the flagged declaration with its semicolon.

    When the declaration is alone on its line, the whole line goes, so no
    blank or indentation-only line is left behind.
    """
    target = document.validate_range(diagnostic.range)
    start, end = target.start, target.end

    end_line = document.line_text(end.line)
    if end_line[end.character : end.character + 1] == ";":
        end = Position(end.line, end.character + 1)

    if not document.line_text(start.line)[: start.character].strip():
        start = Position(start.line, 0)
        rest = document.line_text(end.line)[end.character :]
        if not rest.strip() and end.line + 1 < document.line_count:
            end = Position(end.line + 1, 0)

    return RemoveDeclaration(delete_range=Range(start, end))


def generate_fixes(diagnostic: Diagnostic, text: str) -> list[QuickFix]:
    """Return the quick fixes for *diagnostic*, computed against *text*.

    Both fixes are built from the same unmodified text and are independent
    of each other.
    """
    if diagnostic.code != INEFFECTIVE_Z_INDEX:
        raise ValueError(f"No quick fixes for diagnostic code {diagnostic.code!r}")
    document = TextDocument("", text)
    return [
        insert_isolation_fix(diagnostic, document),
        remove_declaration_fix(diagnostic, document),
    ]
