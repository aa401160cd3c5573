from __future__ import annotations

from dataclasses import dataclass

from stacklens.errors import ConfigError
from stacklens.model.diagnostic import STACKING_CONTEXT_HELP_URI


@dataclass(frozen=True)
class StacklensConfig:
    debounce_ms: int = 400  # quiet window before a coalesced run
    max_wait_ms: int = 1000  # forced run under continuous triggering
    help_uri: str = STACKING_CONTEXT_HELP_URI
    diagnostic_source: str = "stacklens"

    def __post_init__(self) -> None:
        if self.debounce_ms <= 0:
            raise ConfigError(f"debounce_ms must be positive, got {self.debounce_ms}")
        if self.max_wait_ms < self.debounce_ms:
            raise ConfigError(
                f"max_wait_ms ({self.max_wait_ms}) must not be smaller than "
                f"debounce_ms ({self.debounce_ms})"
            )
