"""
Base parser class for the SWeb language.

Provides common token manipulation and utility methods used by all parser mixins.
"""

import logging
from pathlib import Path

from ..errors import ParseError, make_parse_error
from ..lexer import PUNCTUATION, TYPE_KEYWORDS, Token, TokenType
from ..options import CompileOptions

logger = logging.getLogger(__name__)

# Type names are keywords but may stand wherever a plain name is expected
NAME_TOKEN_TYPES = frozenset({TokenType.IDENTIFIER, *TYPE_KEYWORDS})

_QUOTED_TYPES = frozenset(PUNCTUATION.values()) | {
    TokenType.MODEL,
    TokenType.FIELD,
    TokenType.FORM,
    TokenType.VIEW,
    TokenType.LIST,
    TokenType.PAGE,
    *TYPE_KEYWORDS,
}


def describe(token_type: TokenType) -> str:
    """Render a token kind for error messages: keywords and marks are quoted."""
    if token_type in _QUOTED_TYPES:
        return f"'{token_type.value}'"
    return token_type.value


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing: a
    single forward cursor over the token list, one token of lookahead and
    no backtracking.
    """

    def __init__(
        self,
        tokens: list[Token],
        file: Path | None = None,
        options: CompileOptions | None = None,
    ):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer, ending with EOF
            file: Source file path (for error reporting)
            options: Compiler options (lenient recovery, type strictness)
        """
        self.tokens = tokens
        self.file = file
        self.options = options or CompileOptions()
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def error(self, expected: str) -> ParseError:
        """Build a ParseError for the current token."""
        token = self.current_token()
        return make_parse_error(
            expected,
            describe(token.type),
            token.line,
            token.column,
            self.file,
        )

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        if not self.match(token_type):
            raise self.error(describe(token_type))
        return self.advance()

    def expect_name(self) -> Token:
        """
        Expect an identifier, accepting a type-name keyword as one.

        This lets fields be called ``date`` or ``text``.
        """
        if not self.match(*NAME_TOKEN_TYPES):
            raise self.error(describe(TokenType.IDENTIFIER))
        return self.advance()

    def skip_unexpected(self, expected: str) -> None:
        """
        Step over a token that starts nothing the grammar knows.

        In lenient mode the token is dropped with a warning; otherwise
        this is a parse error.
        """
        if not self.options.lenient:
            raise self.error(expected)
        token = self.advance()
        logger.warning(
            "Skipping unexpected %s %r at line %d, column %d",
            describe(token.type),
            token.value,
            token.line,
            token.column,
        )
