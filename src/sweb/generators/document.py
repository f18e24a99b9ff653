"""
Standalone document assembly.

Combines the three artifacts into one HTML file, the form served by the
preview endpoint and written as ``index.html`` by ``sweb compile``.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.compiler import CompileResult


def build_document(result: CompileResult, title: str) -> str:
    """
    Embed markup, script and stylesheet into a complete HTML document.

    Args:
        result: Compiled artifacts
        title: Document title (escaped)

    Returns:
        HTML text
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
  <style>
{result.stylesheet}
  </style>
</head>
<body>
{result.markup}
  <script>
{result.script}
  </script>
</body>
</html>
"""
