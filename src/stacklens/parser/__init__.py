from stacklens.parser.errors import ParseError
from stacklens.parser.transformer import parse_stylesheet

__all__ = ["ParseError", "parse_stylesheet"]
