"""Tests for positions, ranges, documents, edits and diagnostics."""

import pytest

from stacklens.config import StacklensConfig
from stacklens.errors import ConfigError, MissingSourcePosition
from stacklens.model.diagnostic import Diagnostic, Severity
from stacklens.model.node import Declaration, SourcePosition, SourceSpan
from stacklens.model.text import Position, Range, TextDocument, TextEdit, apply_edit, apply_edits


# ---------------------------------------------------------------------------
# Position and Range
# ---------------------------------------------------------------------------


class TestRange:
    def test_from_node_converts_to_zero_based(self) -> None:
        decl = Declaration("z-index", "5", source=SourceSpan(SourcePosition(2, 3), SourcePosition(2, 13)))
        assert Range.from_node(decl) == Range.of(1, 2, 1, 12)

    def test_from_node_without_source(self) -> None:
        with pytest.raises(MissingSourcePosition, match="Declaration has no source position"):
            Range.from_node(Declaration("z-index", "5"))

    def test_contains_is_end_inclusive(self) -> None:
        r = Range.of(1, 2, 1, 12)
        assert r.contains(Position(1, 2))
        assert r.contains(Position(1, 12))
        assert not r.contains(Position(1, 13))
        assert not r.contains(Position(0, 5))

    def test_positions_order_by_line_then_character(self) -> None:
        assert Position(0, 50) < Position(1, 0)
        assert Position(1, 2) < Position(1, 3)

    def test_str_is_one_based(self) -> None:
        assert str(Range.of(0, 5, 0, 15)) == "1:6-1:16"

    def test_is_empty(self) -> None:
        assert Range.of(3, 1, 3, 1).is_empty
        assert not Range.of(3, 1, 3, 2).is_empty


# ---------------------------------------------------------------------------
# TextDocument
# ---------------------------------------------------------------------------


class TestTextDocument:
    def test_line_count(self) -> None:
        assert TextDocument("u", "").line_count == 1
        assert TextDocument("u", "a\nb\n").line_count == 3

    @pytest.mark.parametrize(
        "text, eol",
        [("a\nb", "\n"), ("a\r\nb", "\r\n"), ("single line", "\n")],
    )
    def test_eol(self, text: str, eol: str) -> None:
        assert TextDocument("u", text).eol == eol

    def test_line_text_strips_terminators(self) -> None:
        doc = TextDocument("u", "one\r\ntwo\nthree")
        assert [doc.line_text(i) for i in range(doc.line_count)] == ["one", "two", "three"]

    def test_offset_and_position(self) -> None:
        doc = TextDocument("u", "ab\ncde\nf")
        assert doc.offset_at(Position(1, 2)) == 5
        assert doc.position_at(5) == Position(1, 2)

    def test_offset_clamps(self) -> None:
        doc = TextDocument("u", "ab\ncde")
        assert doc.offset_at(Position(0, 99)) == 2
        assert doc.offset_at(Position(9, 0)) == len(doc.text)
        assert doc.offset_at(Position(-1, 0)) == 0

    def test_validate_range(self) -> None:
        doc = TextDocument("u", "ab\ncde")
        assert doc.validate_range(Range.of(0, 1, 5, 5)) == Range.of(0, 1, 1, 3)


# ---------------------------------------------------------------------------
# Edits
# ---------------------------------------------------------------------------


class TestEdits:
    def test_apply_insert(self) -> None:
        edit = TextEdit(Range.of(1, 0, 1, 0), "  x;\n")
        assert apply_edit("a {\n}", edit) == "a {\n  x;\n}"

    def test_apply_edits_in_any_order(self) -> None:
        text = "a\nb\nc\n"
        edits = [
            TextEdit(Range.of(0, 0, 1, 0), ""),
            TextEdit(Range.of(2, 0, 2, 1), "C"),
        ]
        assert apply_edits(text, edits) == "b\nC\n"
        assert apply_edits(text, list(reversed(edits))) == "b\nC\n"

    def test_edit_to_dict(self) -> None:
        edit = TextEdit(Range.of(0, 0, 0, 1), "x")
        assert edit.to_dict() == {
            "range": {"start": {"line": 0, "character": 0}, "end": {"line": 0, "character": 1}},
            "newText": "x",
        }


# ---------------------------------------------------------------------------
# Diagnostic
# ---------------------------------------------------------------------------


class TestDiagnostic:
    def test_to_dict(self) -> None:
        diag = Diagnostic(range=Range.of(0, 5, 0, 15), message="z-index has no effect")
        data = diag.to_dict()
        assert data["severity"] == 2
        assert data["code"] == "ineffective-z-index"
        assert data["codeDescription"]["href"].startswith("https://developer.mozilla.org/")
        assert data["tags"] == [1]
        assert data["source"] == "stacklens"

    def test_str(self) -> None:
        diag = Diagnostic(range=Range.of(0, 5, 0, 15), message="nope")
        assert str(diag) == "1:6: warning: nope [ineffective-z-index]"

    def test_is_warning(self) -> None:
        assert Diagnostic(range=Range.of(0, 0, 0, 1), message="m").is_warning
        assert not Diagnostic(range=Range.of(0, 0, 0, 1), message="m", severity=Severity.ERROR).is_warning


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    def test_defaults(self) -> None:
        config = StacklensConfig()
        assert config.debounce_ms == 400
        assert config.max_wait_ms == 1000

    @pytest.mark.parametrize("debounce, max_wait", [(0, 1000), (-5, 1000), (500, 100)])
    def test_invalid_values(self, debounce: int, max_wait: int) -> None:
        with pytest.raises(ConfigError):
            StacklensConfig(debounce_ms=debounce, max_wait_ms=max_wait)

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            StacklensConfig(debounce_ms=0)
