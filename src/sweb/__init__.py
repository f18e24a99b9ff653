"""
SWeb - a small declarative language for in-browser CRUD applications.

Source text describing models, forms, lists, views and pages is compiled
into three artifacts: markup, script and stylesheet.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.compiler import CompileResult, compile_app, compile_source
from .core.errors import LexError, ParseError, SWebError, UnknownReferenceError
from .core.options import CompileOptions
from .core.parser import parse_source

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CompileOptions",
    "CompileResult",
    "compile_app",
    "compile_source",
    "parse_source",
    "SWebError",
    "LexError",
    "ParseError",
    "UnknownReferenceError",
]
