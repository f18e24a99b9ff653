"""
Compilation entry points: source text or AppSpec to artifacts.

A compilation either returns all three artifacts or raises exactly one
SWebError; partial output is never returned.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..generators import MarkupGenerator, ScriptGenerator, StylesheetGenerator
from . import ir
from .options import CompileOptions
from .parser import parse_source

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """
    Artifacts of one compilation.

    Attributes:
        markup: HTML body
        script: Behaviour script
        stylesheet: Stylesheet (identical for every application)
        warnings: Non-fatal findings such as unknown field types
    """

    markup: str
    script: str
    stylesheet: str
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "html": self.markup,
            "js": self.script,
            "css": self.stylesheet,
            "warnings": list(self.warnings),
        }


def compile_app(app: ir.AppSpec, options: CompileOptions | None = None) -> CompileResult:
    """
    Generate artifacts from a parsed application.

    Args:
        app: Parsed application
        options: Compiler options

    Returns:
        CompileResult with markup, script, stylesheet and warnings

    Raises:
        UnknownReferenceError: If a form, list or view names an undeclared
            model (or an undeclared field while field references are validated)
    """
    options = options or CompileOptions()
    generators = [
        MarkupGenerator(app, options),
        ScriptGenerator(app, options),
        StylesheetGenerator(app, options),
    ]
    markup, script, stylesheet = (g.generate() for g in generators)

    warnings: list[str] = []
    for generator in generators:
        for warning in generator.warnings:
            if warning not in warnings:
                warnings.append(warning)

    logger.debug(
        "Generated %d bytes of markup, %d of script, %d of stylesheet",
        len(markup),
        len(script),
        len(stylesheet),
    )
    return CompileResult(markup=markup, script=script, stylesheet=stylesheet, warnings=warnings)


def compile_source(
    text: str,
    file: Path | None = None,
    options: CompileOptions | None = None,
) -> CompileResult:
    """
    Lex, parse and generate in one step.

    Raises:
        LexError: On illegal characters or unterminated strings
        ParseError: On grammar violations
        UnknownReferenceError: On unresolved model or field references
    """
    app = parse_source(text, file, options)
    return compile_app(app, options)
