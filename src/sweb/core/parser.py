"""
Parser entry points for SWeb source.

The grammar itself lives in ``dsl_parser_impl``; this module adds the
file-reading convenience used by the CLI.
"""

from pathlib import Path

from . import ir
from .dsl_parser_impl import parse_dsl
from .options import CompileOptions


def parse_source(
    text: str,
    file: Path | None = None,
    options: CompileOptions | None = None,
) -> ir.AppSpec:
    """
    Parse SWeb source text into an AppSpec.

    Args:
        text: Source text
        file: Source file path (for error reporting)
        options: Compiler options

    Returns:
        Parsed application tree

    Raises:
        LexError: On illegal characters or unterminated strings
        ParseError: On grammar violations
    """
    return parse_dsl(text, file, options)


def parse_file(path: Path, options: CompileOptions | None = None) -> ir.AppSpec:
    """
    Parse a single SWeb source file.

    Raises:
        OSError: If the file cannot be read
        LexError: On illegal characters or unterminated strings
        ParseError: On grammar violations
    """
    text = path.read_text(encoding="utf-8")
    return parse_source(text, path, options)
