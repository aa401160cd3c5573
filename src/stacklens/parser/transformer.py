"""Lark Transformer that converts a CSS/SCSS parse tree into a Stylesheet model."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from stacklens.model.node import (
    AtRule,
    Declaration,
    Node,
    Rule,
    SourcePosition,
    SourceSpan,
    Stylesheet,
    link_parents,
)
from stacklens.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def _advance(line: int, column: int, text: str) -> SourcePosition:
    """Return the position just past *text* when it starts at (line, column)."""
    newlines = text.count("\n")
    if newlines == 0:
        return SourcePosition(line, column + len(text))
    return SourcePosition(line + newlines, len(text) - text.rindex("\n"))


def _start_of(token: Token) -> SourcePosition:
    return SourcePosition(token.line, token.column)  # type: ignore[arg-type]


def _end_of(token: Token) -> SourcePosition:
    return _advance(token.line, token.column, str(token).rstrip())  # type: ignore[arg-type]


class _Sentinel:
    """Intermediate objects that only exist while the tree is transformed."""


class _ParenGroup(_Sentinel):
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens


def _flatten(items: list[object]) -> list[Token]:
    tokens: list[Token] = []
    for item in items:
        if isinstance(item, _ParenGroup):
            tokens.extend(item.tokens)
        else:
            tokens.append(item)  # type: ignore[arg-type]
    return tokens


class _Prelude(_Sentinel):
    def __init__(self, tokens: list[Token], source: str):
        self.tokens = tokens
        self.source = source

    @property
    def text(self) -> str:
        # Whitespace between tokens is kept as written; a gap holding a
        # comment collapses to one space.
        parts: list[str] = []
        previous_end: int | None = None
        for token in self.tokens:
            piece = str(token).rstrip()
            if previous_end is not None:
                gap = self.source[previous_end : token.start_pos]
                parts.append(gap if not gap.strip() else " ")
            parts.append(piece)
            previous_end = token.start_pos + len(piece)  # type: ignore[operator]
        return "".join(parts)

    @property
    def start(self) -> SourcePosition:
        return _start_of(self.tokens[0])

    @property
    def end(self) -> SourcePosition:
        return _end_of(self.tokens[-1])


class _Block(_Sentinel):
    def __init__(self, nodes: list[Node], rbrace: Token):
        self.nodes = nodes
        self.end = _end_of(rbrace)


def _build_declaration(prelude: _Prelude) -> Declaration:
    """Split a terminated prelude into property and value."""
    text = prelude.text
    prop, colon, value = text.partition(":")
    prop = prop.strip()
    if not colon or not prop:
        start = prelude.start
        raise ParseError(
            f"Expected 'property: value', got {text!r}",
            line=start.line,
            column=start.column,
        )
    value = value.strip()
    important = False
    match = _IMPORTANT_RE.search(value)
    if match:
        important = True
        value = value[: match.start()].rstrip()
    return Declaration(
        property=prop,
        value=value,
        important=important,
        source=SourceSpan(prelude.start, prelude.end),
    )


class StylesheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into Stylesheet nodes."""

    def __init__(self, source: str) -> None:
        super().__init__()
        self.source = source

    def paren_group(self, items: list[object]) -> _ParenGroup:
        return _ParenGroup(_flatten(items))

    def prelude(self, items: list[object]) -> _Prelude:
        return _Prelude(_flatten(items), self.source)

    def block(self, items: list[object]) -> _Block:
        # Items are: LBRACE, statements..., RBRACE
        rbrace = items[-1]
        nodes = [i for i in items[1:-1] if not isinstance(i, (Token, _Sentinel))]
        return _Block(nodes, rbrace)  # type: ignore[arg-type]

    def declaration(self, items: list[object]) -> Declaration:
        return _build_declaration(items[0])  # type: ignore[arg-type]

    open_declaration = declaration

    def rule(self, items: list[object]) -> Rule:
        prelude, block = items
        return Rule(
            selector=prelude.text,  # type: ignore[union-attr]
            nodes=block.nodes,  # type: ignore[union-attr]
            source=SourceSpan(prelude.start, block.end),  # type: ignore[union-attr]
        )

    def at_rule(self, items: list[object]) -> AtRule:
        keyword: Token = items[0]  # type: ignore[assignment]
        prelude: _Prelude | None = None
        block: _Block | None = None
        for item in items[1:]:
            if isinstance(item, _Prelude):
                prelude = item
            elif isinstance(item, _Block):
                block = item
        if block is not None:
            end = block.end
        elif prelude is not None:
            end = prelude.end
        else:
            end = _end_of(keyword)
        return AtRule(
            name=str(keyword)[1:],
            params=prelude.text if prelude else "",
            nodes=block.nodes if block else None,
            source=SourceSpan(_start_of(keyword), end),
        )

    open_at_rule = at_rule

    def start(self, items: list[Node]) -> Stylesheet:
        stylesheet = Stylesheet(nodes=list(items))
        link_parents(stylesheet)
        return stylesheet


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        start="start",
    )


def _describe(exc: UnexpectedInput) -> str:
    if isinstance(exc, UnexpectedToken):
        if exc.token.type == "$END":
            return "Unexpected end of input (unclosed block?)"
        return f"Unexpected {str(exc.token)!r}"
    if isinstance(exc, UnexpectedCharacters):
        return f"Unexpected character {exc.char!r}"
    return "Unexpected end of input (unclosed block?)"


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse a CSS or SCSS source string into a Stylesheet tree."""
    try:
        tree = _parser().parse(source)
    except UnexpectedInput as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(_describe(e), line=line, column=column) from e
    try:
        return StylesheetTransformer(source).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise
