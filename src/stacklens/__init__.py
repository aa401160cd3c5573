"""stacklens: find CSS declarations that create stacking contexts and z-index values that do nothing."""

__version__ = "0.1.0"
