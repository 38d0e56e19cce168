"""
Cluck Compiler Errors

Defines exception classes for compilation errors.
"""

from typing import Optional


class CluckError(Exception):
    """Base exception for all Cluck errors."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with location information."""
        if self.line is None:
            return self.message
        if self.column is not None:
            return f"line {self.line}:{self.column}: {self.message}"
        return f"line {self.line}: {self.message}"


class SourceError(CluckError):
    """
    An error that points into the source text.

    ``column`` is the cursor column just past the offending text, so the
    caret drawn by ``render`` lands under its last character.
    """

    def __init__(self, message: str, line: int, column: int,
                 source_line: str = ""):
        self.source_line = source_line
        super().__init__(message, line, column)

    def pointer(self) -> str:
        """Return the caret line aligned under the offending column."""
        return " " * max(self.column - 2, 0) + "^"

    def render(self) -> str:
        """Render the message, the source line and the caret."""
        return f"{self}\n{self.source_line}\n{self.pointer()}"


class LexError(SourceError):
    """Raised for invalid characters, escapes and unterminated strings."""
    pass


class ParseError(SourceError):
    """Raised when the lookahead does not fit the grammar."""
    pass


class CompileError(CluckError):
    """Raised for internal faults during code generation."""
    pass


class UnsupportedFeature(CompileError):
    """Raised when the tree contains a construct with no code generation."""
    pass
