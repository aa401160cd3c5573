"""Editor-facing text model: 0-based positions, half-open ranges, documents, edits."""

from __future__ import annotations

from dataclasses import dataclass

from stacklens.errors import MissingSourcePosition
from stacklens.model.node import SourcePosition


@dataclass(frozen=True, order=True)
class Position:
    """A 0-based (line, character) position."""

    line: int
    character: int

    @classmethod
    def from_source(cls, position: SourcePosition) -> Position:
        return cls(line=position.line - 1, character=position.column - 1)

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class Range:
    """A half-open ``[start, end)`` range of 0-based positions."""

    start: Position
    end: Position

    @classmethod
    def of(cls, start_line: int, start_char: int, end_line: int, end_char: int) -> Range:
        return cls(Position(start_line, start_char), Position(end_line, end_char))

    @classmethod
    def from_node(cls, node: object) -> Range:
        """Normalize a parser node's 1-based span to an editor range.

        Raises :class:`MissingSourcePosition` for nodes without a span.
        """
        span = getattr(node, "source", None)
        if span is None:
            raise MissingSourcePosition(node)
        return cls(Position.from_source(span.start), Position.from_source(span.end))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, position: Position) -> bool:
        """True if *position* lies within the range, end inclusive."""
        return self.start <= position <= self.end

    def size_key(self) -> tuple[int, int]:
        """Sort key ordering ranges from smallest to largest."""
        lines = self.end.line - self.start.line
        if lines == 0:
            return (0, self.end.character - self.start.character)
        return (lines, self.end.character)

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    def __str__(self) -> str:
        return (
            f"{self.start.line + 1}:{self.start.character + 1}"
            f"-{self.end.line + 1}:{self.end.character + 1}"
        )


@dataclass(frozen=True)
class TextEdit:
    """Replace the text in ``range`` with ``new_text``."""

    range: Range
    new_text: str

    def to_dict(self) -> dict[str, object]:
        return {"range": self.range.to_dict(), "newText": self.new_text}


class TextDocument:
    """Full text of one document version with line/offset conversions."""

    def __init__(self, uri: str, text: str, version: int = 0) -> None:
        self.uri = uri
        self.text = text
        self.version = version
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    @property
    def eol(self) -> str:
        """The document's line-ending convention."""
        first = self.text.find("\n")
        if first > 0 and self.text[first - 1] == "\r":
            return "\r\n"
        return "\n"

    def line_text(self, line: int) -> str:
        """Text of *line* without its line terminator."""
        start = self._line_starts[line]
        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1] - 1
        else:
            end = len(self.text)
        return self.text[start:end].rstrip("\r")

    def offset_at(self, position: Position) -> int:
        """Clamp *position* into the document and return its string offset."""
        if position.line < 0:
            return 0
        if position.line >= len(self._line_starts):
            return len(self.text)
        line_length = len(self.line_text(position.line))
        character = max(0, min(position.character, line_length))
        return self._line_starts[position.line] + character

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self.text)))
        line = 0
        for index, start in enumerate(self._line_starts):
            if start > offset:
                break
            line = index
        return Position(line, offset - self._line_starts[line])

    def validate_range(self, range_: Range) -> Range:
        """Clamp both ends of *range_* into the document."""
        return Range(
            self.position_at(self.offset_at(range_.start)),
            self.position_at(self.offset_at(range_.end)),
        )

    def __repr__(self) -> str:
        return f"TextDocument(uri={self.uri!r}, version={self.version})"


def apply_edit(text: str, edit: TextEdit) -> str:
    """Return *text* with *edit* applied."""
    document = TextDocument("", text)
    start = document.offset_at(edit.range.start)
    end = document.offset_at(edit.range.end)
    return text[:start] + edit.new_text + text[end:]


def apply_edits(text: str, edits: list[TextEdit]) -> str:
    """Apply non-overlapping *edits*, last one first so earlier ranges stay valid."""
    ordered = sorted(edits, key=lambda e: (e.range.start, e.range.end), reverse=True)
    for edit in ordered:
        text = apply_edit(text, edit)
    return text
