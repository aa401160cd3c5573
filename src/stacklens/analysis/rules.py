"""Stacking context rules for single declarations.

Both predicates are pure functions of a declaration and the other
declarations in its rule. They look at the source as written: no cascade,
no inheritance, no computed values.

Reference:
https://developer.mozilla.org/en-US/docs/Web/CSS/CSS_Positioning/Understanding_z_index/The_stacking_context
"""

from __future__ import annotations

from stacklens.model.node import Declaration, is_rule_like


# ---------------------------------------------------------------------------
# Known value sets
# ---------------------------------------------------------------------------

GLOBAL_NEUTRAL_VALUES = frozenset({"unset", "initial", "inherit", "revert"})

STACKING_CONTEXT_PROPERTIES = frozenset({
    "clip-path",
    "contain",
    "filter",
    "isolation",
    "mask",
    "mask-border",
    "mask-image",
    "mix-blend-mode",
    "opacity",
    "perspective",
    "position",
    "transform",
    "-webkit-overflow-scrolling",
    "webkit-overflow-scrolling",
    "will-change",
    "z-index",
})

# Properties that only apply to flex or grid items. A rule setting one of
# them is assumed to style a flex/grid child.
FLEX_AND_GRID_CHILD_PROPERTIES = frozenset({
    "flex",
    "flex-grow",
    "flex-shrink",
    "flex-basis",
    "grid-column-start",
    "grid-column-end",
    "grid-row-start",
    "grid-row-end",
    "grid-column",
    "grid-row",
    "align-self",
    "justify-self",
    "place-self",
    "order",
})

_NONE_DISABLED = frozenset({
    "transform",
    "filter",
    "perspective",
    "clip-path",
    "mask",
    "mask-image",
    "mask-border",
})

_CONTAIN_VALUES = frozenset({"layout", "paint", "strict", "content"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_positioned(declaration: Declaration) -> bool:
    return declaration.property == "position" and declaration.value in ("absolute", "relative")


def _z_index_applies(declaration: Declaration) -> bool:
    """Heuristic: does the rule look positioned or like a flex/grid item?

    The element's real ``position`` and its parent's ``display`` are not
    visible to a syntactic check, so sibling declarations stand in for them.
    """
    if not is_rule_like(declaration.parent):
        return False
    return any(
        _is_positioned(sibling) or sibling.property in FLEX_AND_GRID_CHILD_PROPERTIES
        for sibling in declaration.siblings()
    )


def _will_change_names_context_property(value: str) -> bool:
    return any(token.strip() in STACKING_CONTEXT_PROPERTIES for token in value.split(","))


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def establishes_stacking_context(declaration: Declaration) -> bool:
    """True if *declaration* makes its rule establish a stacking context."""
    prop = declaration.property
    value = declaration.value
    if prop not in STACKING_CONTEXT_PROPERTIES or value in GLOBAL_NEUTRAL_VALUES:
        return False
    if prop == "z-index":
        return value != "auto" and _z_index_applies(declaration)
    if prop == "position":
        return value in ("fixed", "sticky")
    if prop == "opacity":
        return value != "1"
    if prop == "mix-blend-mode":
        return value != "normal"
    if prop in _NONE_DISABLED:
        return value != "none"
    if prop == "isolation":
        return value == "isolate"
    if prop in ("-webkit-overflow-scrolling", "webkit-overflow-scrolling"):
        return value == "touch"
    if prop == "contain":
        return value in _CONTAIN_VALUES
    if prop == "will-change":
        return _will_change_names_context_property(value)
    return False


def is_ineffective_z_index(declaration: Declaration) -> bool:
    """True for a ``z-index`` that cannot apply because its rule has no stacking context."""
    return (
        declaration.property == "z-index"
        and declaration.value != "auto"
        and declaration.value not in GLOBAL_NEUTRAL_VALUES
        and not any(establishes_stacking_context(d) for d in declaration.siblings())
    )
