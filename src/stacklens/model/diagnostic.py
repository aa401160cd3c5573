"""Diagnostic model: structured findings about a stylesheet, ready for publication."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from stacklens.model.text import Range

INEFFECTIVE_Z_INDEX = "ineffective-z-index"

STACKING_CONTEXT_HELP_URI = (
    "https://developer.mozilla.org/en-US/docs/Web/CSS/CSS_Positioning/"
    "Understanding_z_index/The_stacking_context"
)


class Severity(Enum):
    """Severity level for a diagnostic, valued as the LSP wire number."""

    ERROR = 1
    WARNING = 2
    INFO = 3
    HINT = 4


class DiagnosticTag(Enum):
    """Extra rendering hints for a diagnostic."""

    UNNECESSARY = 1
    DEPRECATED = 2


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a stylesheet.

    Attributes:
        range: 0-based half-open range of the offending declaration.
        message: Human-readable description of the problem.
        severity: How serious the issue is.
        code: Identifier of the check that produced this diagnostic.
        help_uri: Documentation link for the code.
        tags: Rendering hints; ineffective code is faded as unnecessary.
        source: Name of the tool reported to the editor.
    """

    range: Range
    message: str
    severity: Severity = Severity.WARNING
    code: str = INEFFECTIVE_Z_INDEX
    help_uri: str = STACKING_CONTEXT_HELP_URI
    tags: frozenset[DiagnosticTag] = field(
        default_factory=lambda: frozenset({DiagnosticTag.UNNECESSARY})
    )
    source: str = "stacklens"

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def to_dict(self) -> dict[str, object]:
        """Serialize in the shape of an LSP ``Diagnostic``."""
        return {
            "range": self.range.to_dict(),
            "message": self.message,
            "severity": self.severity.value,
            "code": self.code,
            "codeDescription": {"href": self.help_uri},
            "tags": sorted(tag.value for tag in self.tags),
            "source": self.source,
        }

    def __str__(self) -> str:
        location = f"{self.range.start.line + 1}:{self.range.start.character + 1}"
        return f"{location}: {self.severity.name.lower()}: {self.message} [{self.code}]"
