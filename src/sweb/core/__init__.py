"""Core SWeb functionality: lexer, parser, IR, options and the compiler entry points."""

from . import ir
from .errors import (
    ErrorContext,
    LexError,
    ParseError,
    SWebError,
    UnknownReferenceError,
)
from .options import CompileOptions, ConfigError, discover_options, load_options

__all__ = [
    "ir",
    "SWebError",
    "ErrorContext",
    "LexError",
    "ParseError",
    "UnknownReferenceError",
    "CompileOptions",
    "ConfigError",
    "discover_options",
    "load_options",
]
