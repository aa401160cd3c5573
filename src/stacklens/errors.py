"""Exception types shared across stacklens."""

from __future__ import annotations


class StacklensError(Exception):
    """Base class for stacklens errors."""


class MissingSourcePosition(StacklensError):
    """Raised when a node has no source span but a range is required."""

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"{type(node).__name__} has no source position")


class ConfigError(StacklensError, ValueError):
    """Raised when a configuration value is out of range."""
