"""Parser error types."""

from stacklens.errors import StacklensError


class ParseError(StacklensError):
    """Raised when CSS/SCSS source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.line is not None and self.line > 0:
            return f"line {self.line}, column {self.column}: {message}"
        return message
