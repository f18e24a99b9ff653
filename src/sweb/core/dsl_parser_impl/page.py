"""
Page parser mixin for the SWeb language.

DSL Syntax:

    page Home("Task Tracker") { NewTask, AllTasks }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class PageParserMixin:
    """Parser mixin for page declarations."""

    if TYPE_CHECKING:
        expect: Any
        expect_name: Any
        parse_name_list: Any

    def parse_page(self) -> ir.PageSpec:
        """
        Parse a page declaration.

        Grammar:
            page IDENTIFIER LPAREN STRING RPAREN LBRACE name_list RBRACE

        Component names are resolved by the generators, not here.
        """
        self.expect(TokenType.PAGE)
        name = self.expect_name().value

        self.expect(TokenType.LPAREN)
        title = self.expect(TokenType.STRING).value
        self.expect(TokenType.RPAREN)

        self.expect(TokenType.LBRACE)
        components = self.parse_name_list()
        self.expect(TokenType.RBRACE)

        return ir.PageSpec(name=name, title=title, components=components)
