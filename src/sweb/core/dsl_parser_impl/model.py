"""
Model parser mixin for the SWeb language.

DSL Syntax:

    model Task {
      field title: text required;
      field estimate: number default = 1;
      field done: boolean default = false;
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ParseError
from ..lexer import TokenType
from .base import describe

BOOLEAN_LITERALS = {"true": True, "false": False}


class ModelParserMixin:
    """Parser mixin for model and field declarations."""

    if TYPE_CHECKING:
        expect: Any
        expect_name: Any
        advance: Any
        match: Any
        current_token: Any
        error: Any
        skip_unexpected: Any
        options: Any
        file: Any

    def parse_model(self) -> ir.ModelSpec:
        """
        Parse a model block.

        Grammar:
            model IDENTIFIER LBRACE (field_decl | SKIP)* RBRACE

        Returns:
            ModelSpec with fields in declaration order
        """
        self.expect(TokenType.MODEL)
        name = self.expect_name().value
        self.expect(TokenType.LBRACE)

        fields: list[ir.FieldSpec] = []
        while not self.match(TokenType.RBRACE):
            if self.match(TokenType.EOF):
                raise self.error("'}'")
            if self.match(TokenType.FIELD):
                fields.append(self.parse_field())
            else:
                self.skip_unexpected("'field' or '}'")

        self.expect(TokenType.RBRACE)
        return ir.ModelSpec(name=name, fields=fields)

    def parse_field(self) -> ir.FieldSpec:
        """
        Parse a field declaration.

        Grammar:
            field IDENTIFIER COLON IDENTIFIER modifier* SEMICOLON
            modifier := 'required' | 'default' EQUALS literal

        Modifiers may repeat in any order; the last ``default`` wins.
        """
        self.expect(TokenType.FIELD)
        name = self.expect_name().value
        self.expect(TokenType.COLON)
        type_token = self.expect_name()
        field_type = type_token.value

        if self.options.strict_types and field_type not in ir.FIELD_TYPES:
            raise ParseError(
                f"Expected field type (text, number, boolean, date), got {field_type!r}",
                "field type (text, number, boolean, date)",
                describe(type_token.type),
                type_token.line,
                type_token.column,
                self.file,
            )

        required = False
        default: bool | int | float | str | None = None

        while self.match(TokenType.IDENTIFIER):
            modifier = self.current_token().value
            if modifier == "required":
                self.advance()
                required = True
            elif modifier == "default":
                self.advance()
                self.expect(TokenType.EQUALS)
                default = self.parse_literal()
            else:
                self.skip_unexpected("'required', 'default' or ';'")

        self.expect(TokenType.SEMICOLON)
        return ir.FieldSpec(name=name, type=field_type, required=required, default=default)

    def parse_literal(self) -> bool | int | float | str:
        """
        Parse a default value.

        Strings stay strings, numbers become int or float, and the bare
        words ``true``/``false`` become booleans.
        """
        token = self.current_token()
        if token.type == TokenType.STRING:
            self.advance()
            return str(token.value)
        if token.type == TokenType.NUMBER:
            self.advance()
            if "." in token.value:
                return float(token.value)
            return int(token.value)
        if token.type == TokenType.IDENTIFIER and token.value in BOOLEAN_LITERALS:
            self.advance()
            return BOOLEAN_LITERALS[token.value]
        raise self.error("literal")
