"""
Error types for SWeb lexing, parsing, and code generation.

Every failure aborts the whole compilation: callers receive exactly one
error and never a partial tree or partial artifacts.
"""

from dataclasses import dataclass
from pathlib import Path


class SWebError(Exception):
    """Base exception for all SWeb errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class LexError(SWebError):
    """
    Raised when the source contains text the lexer cannot tokenize.

    Examples:
    - A character outside the language's character classes
    - An unterminated string literal
    """

    def __init__(
        self,
        message: str,
        char: str,
        line: int,
        column: int,
        file: Path | None = None,
    ):
        self.char = char
        self.line = line
        self.column = column
        super().__init__(message, ErrorContext(line=line, column=column, file=file))


class ParseError(SWebError):
    """
    Raised when the token stream does not match the grammar.

    Attributes:
        expected: Description of the token kind the parser wanted
        found: Kind of the token actually present
    """

    def __init__(
        self,
        message: str,
        expected: str,
        found: str,
        line: int,
        column: int,
        file: Path | None = None,
    ):
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column
        super().__init__(message, ErrorContext(line=line, column=column, file=file))


class UnknownReferenceError(SWebError):
    """
    Raised during generation when a binding names something that is not declared.

    Examples:
    - A form, list or view bound to a model that does not exist
    - A field subset entry the bound model does not declare

    Attributes:
        kind: "model" or "field"
        name: The unresolved name
        owner: Name of the declaration holding the reference
    """

    def __init__(self, message: str, kind: str, name: str, owner: str):
        self.kind = kind
        self.name = name
        self.owner = owner
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Source location for an error.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional path of the source file
        snippet: Optional source excerpt around the error
    """

    line: int
    column: int
    file: Path | None = None
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            "app.sweb:10:5" when the file is known, else "line 10, column 5"
        """
        if self.file is not None:
            location = f"{self.file}:{self.line}:{self.column}"
        else:
            location = f"line {self.line}, column {self.column}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippets start two lines above the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^")

        return "\n".join(formatted)


def source_snippet(text: str, line: int, radius: int = 2) -> str:
    """Return the lines of ``text`` within ``radius`` of ``line`` (1-indexed)."""
    lines = text.split("\n")
    start = max(1, line - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start - 1 : end])


def make_lex_error(char: str, line: int, column: int, file: Path | None = None) -> LexError:
    """
    Helper to create a LexError for an illegal character.

    Args:
        char: The offending character
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional source file path

    Returns:
        LexError with context attached
    """
    return LexError(f"Unexpected character: {char!r}", char, line, column, file)


def make_parse_error(
    expected: str,
    found: str,
    line: int,
    column: int,
    file: Path | None = None,
) -> ParseError:
    """
    Helper to create a ParseError describing an expected/found mismatch.

    Args:
        expected: Token kind the grammar required
        found: Token kind present in the input
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional source file path

    Returns:
        ParseError with context attached
    """
    return ParseError(f"Expected {expected}, got {found}", expected, found, line, column, file)


def make_reference_error(
    kind: str,
    name: str,
    owner_kind: str,
    owner: str,
    model: str | None = None,
) -> UnknownReferenceError:
    """
    Helper to create an UnknownReferenceError.

    Args:
        kind: "model" or "field"
        name: The unresolved name
        owner_kind: Kind of the referencing declaration (form, list, view)
        owner: Name of the referencing declaration
        model: Model searched, for field references

    Returns:
        UnknownReferenceError naming the missing target
    """
    if kind == "model":
        message = f"Model {name} not found for {owner_kind} {owner}"
    else:
        message = f"Field {name} not found in model {model} for {owner_kind} {owner}"
    return UnknownReferenceError(message, kind, name, owner)
