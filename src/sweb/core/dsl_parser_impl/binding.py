"""
Binding parser mixin for the SWeb language.

Forms, lists and views share one syntax:

    form NewTask(Task) { title, estimate }
    list AllTasks(Task) { }
    view TaskCards(Task) { title, done }

An empty field list means "every field of the model".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType
from .base import NAME_TOKEN_TYPES

BINDING_TYPES: dict[TokenType, type[ir.BindingSpec]] = {
    TokenType.FORM: ir.FormSpec,
    TokenType.LIST: ir.ListSpec,
    TokenType.VIEW: ir.ViewSpec,
}


class BindingParserMixin:
    """Parser mixin for form, list and view declarations."""

    if TYPE_CHECKING:
        expect: Any
        expect_name: Any
        advance: Any
        match: Any
        current_token: Any

    def parse_binding(self) -> ir.BindingSpec:
        """
        Parse a form, list or view declaration.

        Grammar:
            (form | list | view) IDENTIFIER LPAREN IDENTIFIER RPAREN
                LBRACE name_list RBRACE

        Returns:
            FormSpec, ListSpec or ViewSpec depending on the keyword
        """
        spec_cls = BINDING_TYPES[self.advance().type]
        name = self.expect_name().value

        self.expect(TokenType.LPAREN)
        model = self.expect_name().value
        self.expect(TokenType.RPAREN)

        self.expect(TokenType.LBRACE)
        fields = self.parse_name_list()
        self.expect(TokenType.RBRACE)

        return spec_cls(name=name, model=model, fields=fields)

    def parse_name_list(self) -> list[str]:
        """
        Parse a possibly empty comma-separated list of names.

        Grammar:
            (IDENTIFIER (COMMA IDENTIFIER)*)?
        """
        names: list[str] = []
        if not self.match(*NAME_TOKEN_TYPES):
            return names

        names.append(self.expect_name().value)
        while self.match(TokenType.COMMA):
            self.advance()
            names.append(self.expect_name().value)
        return names
