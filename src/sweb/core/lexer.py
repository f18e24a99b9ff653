"""
Lexer/Tokenizer for the SWeb language.

Converts raw source text into a flat stream of tokens with source
location tracking. Whitespace and ``//`` line comments are dropped.
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import LexError, make_lex_error

logger = logging.getLogger(__name__)

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)
# Byte-order mark; str.isspace() does not cover it
BYTE_ORDER_MARK = "\ufeff"


class TokenType(Enum):
    """Token types in the SWeb language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Declaration keywords
    MODEL = "model"
    FIELD = "field"
    FORM = "form"
    VIEW = "view"
    LIST = "list"
    PAGE = "page"

    # Type-name keywords
    TEXT = "text"
    NUMBER_TYPE = "number"  # NUMBER is the numeric literal
    BOOLEAN = "boolean"
    DATE = "date"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    COLON = ":"
    SEMICOLON = ";"
    COMMA = ","
    EQUALS = "="

    # Special
    EOF = "EOF"


# Keywords mapping
KEYWORDS = {
    "model",
    "field",
    "form",
    "view",
    "list",
    "page",
    "text",
    "number",
    "boolean",
    "date",
}

TYPE_KEYWORDS = frozenset(
    {TokenType.TEXT, TokenType.NUMBER_TYPE, TokenType.BOOLEAN, TokenType.DATE}
)

PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "=": TokenType.EQUALS,
}


@dataclass(frozen=True)
class Token:
    """
    A single token in the source.

    Attributes:
        type: Type of token
        value: Source text of the token (decoded contents for strings)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the SWeb language.

    Each instance tokenizes one source text; the cursor state lives on the
    instance and is never shared between compilations.
    """

    def __init__(self, text: str, file: Path | None = None):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_trivia(self) -> None:
        """Skip whitespace and ``//`` comments, in any order and quantity."""
        while True:
            ch = self.current_char()
            if ch is not None and (ch.isspace() or ch == BYTE_ORDER_MARK):
                self.advance()
            elif ch == "/" and self.peek_char() == "/":
                while self.current_char() not in (None, "\n"):
                    self.advance()
            else:
                return

    def read_string(self) -> str:
        """
        Read a double-quoted string.

        Only ``\\"`` is an escape; any other backslash is kept verbatim.
        """
        start_line = self.line
        start_col = self.column
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == '"':
                break
            if current == "\\" and self.peek_char() == '"':
                self.advance()
                current = '"'
            chars.append(current)
            self.advance()

        if self.current_char() != '"':
            raise LexError("Unterminated string literal", '"', start_line, start_col, self.file)

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_number(self) -> str:
        """Read digits with at most one decimal point."""
        chars = []
        seen_dot = False
        while True:
            current = self.current_char()
            if current in DIGITS:
                chars.append(current)
            elif current == "." and not seen_dot:
                seen_dot = True
                chars.append(current)
            else:
                break
            self.advance()
        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        while self.current_char() in IDENT_CHARS:
            chars.append(self.current_char())
            self.advance()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens terminated by an EOF token

        Raises:
            LexError: On a character outside the language, or an unterminated string
        """
        while True:
            self.skip_trivia()

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            if ch in PUNCTUATION:
                self.advance()
                self.tokens.append(Token(PUNCTUATION[ch], ch, token_line, token_col))

            elif ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch in DIGITS:
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, token_line, token_col))

            elif ch in IDENT_START:
                value = self.read_identifier()
                if value in KEYWORDS:
                    token_type = TokenType(value)
                else:
                    token_type = TokenType.IDENTIFIER
                self.tokens.append(Token(token_type, value, token_line, token_col))

            else:
                raise make_lex_error(ch, token_line, token_col, self.file)

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        logger.debug("Tokenized %d tokens from %s", len(self.tokens), self.file or "<source>")

        return self.tokens


def tokenize(text: str, file: Path | None = None) -> list[Token]:
    """
    Convenience function to tokenize source text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
