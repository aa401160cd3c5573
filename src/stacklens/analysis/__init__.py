"""Stacking context analysis: declaration rules and the document pipeline."""

from stacklens.analysis.analyzer import analyze, analyze_stylesheet
from stacklens.analysis.rules import (
    FLEX_AND_GRID_CHILD_PROPERTIES,
    GLOBAL_NEUTRAL_VALUES,
    STACKING_CONTEXT_PROPERTIES,
    establishes_stacking_context,
    is_ineffective_z_index,
)

__all__ = [
    "analyze",
    "analyze_stylesheet",
    "establishes_stacking_context",
    "is_ineffective_z_index",
    "GLOBAL_NEUTRAL_VALUES",
    "STACKING_CONTEXT_PROPERTIES",
    "FLEX_AND_GRID_CHILD_PROPERTIES",
]
