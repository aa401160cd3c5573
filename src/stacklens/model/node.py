"""Stylesheet tree: Stylesheet, Rule, AtRule, and Declaration nodes."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass(frozen=True)
class SourcePosition:
    """A 1-based (line, column) location in the source text."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceSpan:
    """Start and end of a node; ``end`` is the column just past the last character."""

    start: SourcePosition
    end: SourcePosition


class _TreeNode:
    """Parent back-reference shared by every node type.

    The reference is weak: a node never keeps its ancestors alive.
    """

    kind = "node"
    _parent_ref: weakref.ReferenceType | None = None

    @property
    def parent(self) -> Container | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def attach(self, parent: Container) -> None:
        self._parent_ref = weakref.ref(parent)


@dataclass(eq=False)
class Declaration(_TreeNode):
    """A ``property: value`` pair inside a rule or at the stylesheet root."""

    kind = "decl"

    property: str
    value: str
    important: bool = False
    source: SourceSpan | None = None

    def siblings(self) -> list[Declaration]:
        """Declarations sharing this declaration's parent, itself included."""
        parent = self.parent
        if parent is None:
            return [self]
        return [n for n in parent.nodes or [] if isinstance(n, Declaration)]


@dataclass(eq=False)
class Rule(_TreeNode):
    """A selector with a block of child nodes."""

    kind = "rule"

    selector: str
    nodes: list[Node] = field(default_factory=list)
    source: SourceSpan | None = None


@dataclass(eq=False)
class AtRule(_TreeNode):
    """An ``@name params`` statement; ``nodes`` is None when it has no block."""

    kind = "atrule"

    name: str
    params: str = ""
    nodes: list[Node] | None = None
    source: SourceSpan | None = None


@dataclass(eq=False)
class Stylesheet(_TreeNode):
    """Root of the tree for one document snapshot."""

    kind = "root"

    nodes: list[Node] = field(default_factory=list)
    source: SourceSpan | None = None

    def walk(self) -> Iterator[Node]:
        """Yield every descendant in depth-first pre-order."""
        stack: list[Node] = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            yield node
            children = getattr(node, "nodes", None)
            if children:
                stack.extend(reversed(children))

    def declarations(self) -> Iterator[Declaration]:
        for node in self.walk():
            if isinstance(node, Declaration):
                yield node


Node = Union[Rule, AtRule, Declaration]
Container = Union[Rule, AtRule, Stylesheet]


def is_rule_like(node: object) -> bool:
    """True for nodes that can own declarations: rules and at-rules."""
    return isinstance(node, (Rule, AtRule))


def link_parents(container: Container) -> None:
    """Set the parent back-reference of every descendant of *container*."""
    for child in container.nodes or []:
        child.attach(container)
        if not isinstance(child, Declaration):
            link_parents(child)
