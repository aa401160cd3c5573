"""Stacklens model layer -- public type re-exports."""

from stacklens.model.analysis import AnalysisResult, StackingContextDeclaration
from stacklens.model.diagnostic import (
    INEFFECTIVE_Z_INDEX,
    STACKING_CONTEXT_HELP_URI,
    Diagnostic,
    DiagnosticTag,
    Severity,
)
from stacklens.model.fix import InsertIsolationIsolate, QuickFix, RemoveDeclaration
from stacklens.model.node import (
    AtRule,
    Declaration,
    Rule,
    SourcePosition,
    SourceSpan,
    Stylesheet,
    is_rule_like,
)
from stacklens.model.text import Position, Range, TextDocument, TextEdit, apply_edit, apply_edits

__all__ = [
    # tree
    "Stylesheet",
    "Rule",
    "AtRule",
    "Declaration",
    "SourcePosition",
    "SourceSpan",
    "is_rule_like",
    # text
    "Position",
    "Range",
    "TextDocument",
    "TextEdit",
    "apply_edit",
    "apply_edits",
    # diagnostic
    "Severity",
    "DiagnosticTag",
    "Diagnostic",
    "INEFFECTIVE_Z_INDEX",
    "STACKING_CONTEXT_HELP_URI",
    # analysis
    "AnalysisResult",
    "StackingContextDeclaration",
    # fix
    "InsertIsolationIsolate",
    "RemoveDeclaration",
    "QuickFix",
]
