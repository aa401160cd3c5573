"""Document analysis: parse a stylesheet and collect stacking context ranges and diagnostics."""

from __future__ import annotations

import logging
import time

from stacklens.analysis.rules import establishes_stacking_context, is_ineffective_z_index
from stacklens.errors import MissingSourcePosition
from stacklens.model.analysis import AnalysisResult, StackingContextDeclaration
from stacklens.model.diagnostic import STACKING_CONTEXT_HELP_URI, Diagnostic
from stacklens.model.node import Declaration, Stylesheet, is_rule_like
from stacklens.model.text import Range
from stacklens.parser import parse_stylesheet

logger = logging.getLogger(__name__)

INEFFECTIVE_Z_INDEX_MESSAGE = (
    "z-index has no effect: this rule does not establish a stacking context "
    "(add position: relative or absolute, or isolation: isolate)"
)


def _rule_range(declaration: Declaration) -> Range | None:
    parent = declaration.parent
    if not is_rule_like(parent):
        return None
    try:
        return Range.from_node(parent)
    except MissingSourcePosition as exc:
        logger.debug("No rule range for %s: %s", declaration.property, exc)
        return None


def analyze_stylesheet(
    stylesheet: Stylesheet,
    uri: str,
    version: int = 0,
    *,
    help_uri: str = STACKING_CONTEXT_HELP_URI,
    source: str = "stacklens",
) -> AnalysisResult:
    """Walk *stylesheet* in pre-order and build its AnalysisResult.

    Declarations without a source position are skipped for range collection;
    the rest of the document is still analyzed.
    """
    property_ranges: list[Range] = []
    rule_ranges: list[Range] = []
    seen_rules: set[Range] = set()
    contexts: list[StackingContextDeclaration] = []
    diagnostics: list[Diagnostic] = []

    for declaration in stylesheet.declarations():
        try:
            if establishes_stacking_context(declaration):
                decl_range = Range.from_node(declaration)
                rule_range = _rule_range(declaration)
                property_ranges.append(decl_range)
                contexts.append(
                    StackingContextDeclaration(
                        property=declaration.property,
                        value=declaration.value,
                        range=decl_range,
                        rule_range=rule_range,
                    )
                )
                if rule_range is not None and rule_range not in seen_rules:
                    seen_rules.add(rule_range)
                    rule_ranges.append(rule_range)
            if is_ineffective_z_index(declaration):
                diagnostics.append(
                    Diagnostic(
                        range=Range.from_node(declaration),
                        message=INEFFECTIVE_Z_INDEX_MESSAGE,
                        help_uri=help_uri,
                        source=source,
                    )
                )
        except MissingSourcePosition as exc:
            logger.debug("Skipping %s in %s: %s", declaration.property, uri, exc)

    return AnalysisResult(
        uri=uri,
        version=version,
        property_ranges=tuple(property_ranges),
        rule_ranges=tuple(rule_ranges),
        diagnostics=tuple(diagnostics),
        contexts=tuple(contexts),
    )


def analyze(
    source_text: str,
    uri: str,
    version: int = 0,
    *,
    help_uri: str = STACKING_CONTEXT_HELP_URI,
    source: str = "stacklens",
) -> AnalysisResult:
    """Parse *source_text* and analyze it.

    Raises :class:`~stacklens.parser.ParseError` on malformed input.
    """
    start = time.monotonic()
    stylesheet = parse_stylesheet(source_text)
    result = analyze_stylesheet(
        stylesheet, uri, version, help_uri=help_uri, source=source
    )
    logger.debug(
        "Analyzed %s v%d: contexts=%d rules=%d diagnostics=%d in %.1fms",
        uri,
        version,
        len(result.property_ranges),
        len(result.rule_ranges),
        len(result.diagnostics),
        (time.monotonic() - start) * 1000,
    )
    return result
