"""
SWeb code generators.

One generator per artifact:
- MarkupGenerator: HTML body
- ScriptGenerator: behaviour script
- StylesheetGenerator: fixed stylesheet

``document.build_document`` combines the three into a standalone file.
"""

from .base import Generator
from .markup import MarkupGenerator
from .script import ScriptGenerator
from .styles import STYLESHEET, StylesheetGenerator

__all__ = [
    "Generator",
    "MarkupGenerator",
    "ScriptGenerator",
    "StylesheetGenerator",
    "STYLESHEET",
]
