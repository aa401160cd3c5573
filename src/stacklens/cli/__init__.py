from stacklens.cli.main import cli

__all__ = ["cli"]
