"""
SWeb Parser Package.

The parser is built from mixins, one per declaration kind, on top of
BaseParser's token cursor.

The main exports are:
- Parser: The complete parser class
- parse_dsl: Convenience function to lex and parse source text

Usage:
    from sweb.core.dsl_parser_impl import parse_dsl

    app = parse_dsl(text, Path("app.sweb"))
"""

import logging
from pathlib import Path

from .. import ir
from ..lexer import TokenType, tokenize
from ..options import CompileOptions
from .base import BaseParser
from .binding import BINDING_TYPES, BindingParserMixin
from .model import ModelParserMixin
from .page import PageParserMixin

logger = logging.getLogger(__name__)


class Parser(
    BaseParser,
    ModelParserMixin,
    BindingParserMixin,
    PageParserMixin,
):
    """
    Complete SWeb Parser.

    - ModelParserMixin: model blocks, fields, modifiers and literals
    - BindingParserMixin: form, list and view declarations
    - PageParserMixin: page declarations
    """

    def parse(self) -> ir.AppSpec:
        """
        Parse the whole token stream.

        Tokens that start no declaration are skipped in lenient mode.

        Returns:
            AppSpec with every declaration in source order
        """
        models: list[ir.ModelSpec] = []
        forms: list[ir.FormSpec] = []
        views: list[ir.ViewSpec] = []
        lists: list[ir.ListSpec] = []
        pages: list[ir.PageSpec] = []

        while not self.match(TokenType.EOF):
            if self.match(TokenType.MODEL):
                models.append(self.parse_model())

            elif self.match(*BINDING_TYPES):
                binding = self.parse_binding()
                if isinstance(binding, ir.FormSpec):
                    forms.append(binding)
                elif isinstance(binding, ir.ListSpec):
                    lists.append(binding)
                else:
                    views.append(binding)

            elif self.match(TokenType.PAGE):
                pages.append(self.parse_page())

            else:
                self.skip_unexpected("declaration")

        logger.debug(
            "Parsed %d models, %d forms, %d views, %d lists, %d pages",
            len(models),
            len(forms),
            len(views),
            len(lists),
            len(pages),
        )

        return ir.AppSpec(
            models=models,
            forms=forms,
            views=views,
            lists=lists,
            pages=pages,
        )


def parse_dsl(
    text: str,
    file: Path | None = None,
    options: CompileOptions | None = None,
) -> ir.AppSpec:
    """
    Lex and parse source text into an AppSpec.

    Args:
        text: Source text
        file: Source file path (for error reporting)
        options: Compiler options

    Returns:
        The parsed application tree

    Raises:
        LexError: On illegal characters
        ParseError: On grammar violations
    """
    tokens = tokenize(text, file)
    parser = Parser(tokens, file, options)
    return parser.parse()


__all__ = ["Parser", "parse_dsl"]
