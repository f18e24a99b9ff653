"""
SWeb command line interface.

Commands:
    compile  Compile a .sweb file to HTML, JS and CSS plus a combined index.html
    parse    Parse a .sweb file and print its declarations (text or JSON)
    serve    Run the HTTP API
    help     Show usage
"""

from __future__ import annotations

import dataclasses
import json
import logging
import platform
from pathlib import Path

import typer
from rich.console import Console

from . import __version__
from .core.compiler import compile_app
from .core.errors import LexError, ParseError, SWebError, source_snippet
from .core.ir import AppSpec
from .core.options import discover_options
from .core.parser import parse_source
from .generators.document import build_document
from .runtime.logging import setup_logging

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

DEFAULT_OUT_DIR = Path("./dist")
PARSE_FORMATS = ("text", "json")

HELP_TEXT = """SWeb CLI - Command Line Interface for SWeb

Usage:
  sweb [command] [options]

Commands:
  compile <file>            Compile a .sweb file to HTML, JS, and CSS
  parse <file>              Parse a .sweb file and output its AST
  serve                     Run the HTTP API
  help                      Show this help message

Options:
  --out <directory>         Output directory for compiled files (default: ./dist)
  --format <format>         Output format for parse command: json or text (default: text)
  --config <path>           Compiler options file (default: sweb.toml beside the source)

Examples:
  sweb compile app.sweb --out ./dist
  sweb parse app.sweb --format json
"""

_verbose = False


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"SWeb version {__version__}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="SWeb - compile declarative app descriptions to HTML, JS and CSS",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """SWeb CLI main callback for global options."""
    global _verbose
    _verbose = verbose
    setup_logging(logging.DEBUG if verbose else None)


def _read_source(file: Path | None, action: str) -> str:
    """Read a source file or exit 1."""
    if file is None:
        typer.echo(f"No file specified for {action}.", err=True)
        raise typer.Exit(code=1)
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Cannot read {file}: {e}", err=True)
        raise typer.Exit(code=1)


def _report_error(prefix: str, error: SWebError, text: str) -> None:
    """Print a compilation failure; with --verbose, include the source excerpt."""
    typer.echo(f"{prefix}: {error}", err=True)
    if _verbose and isinstance(error, (LexError, ParseError)) and error.context is not None:
        context = dataclasses.replace(error.context, snippet=source_snippet(text, error.line))
        typer.echo(context.format(), err=True)


@app.command(name="compile")
def compile_command(
    file: Path | None = typer.Argument(None, help="SWeb source file"),  # noqa: B008
    out: Path = typer.Option(DEFAULT_OUT_DIR, "--out", "-o", help="Output directory"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", help="Path to sweb.toml"),  # noqa: B008
) -> None:
    """Compile a .sweb file to HTML, JS and CSS."""
    text = _read_source(file, "compilation")
    assert file is not None

    try:
        options = discover_options(file, config)
        result = compile_app(parse_source(text, file, options), options)
    except SWebError as e:
        _report_error("Compilation failed", e, text)
        raise typer.Exit(code=1)

    for warning in result.warnings:
        err_console.print(f"[yellow]warning:[/yellow] {warning}", highlight=False)

    base_name = file.stem
    document = build_document(result, f"{base_name} - SWeb Application")
    try:
        out.mkdir(parents=True, exist_ok=True)
        (out / f"{base_name}.html").write_text(result.markup, encoding="utf-8")
        (out / f"{base_name}.js").write_text(result.script, encoding="utf-8")
        (out / f"{base_name}.css").write_text(result.stylesheet, encoding="utf-8")
        (out / "index.html").write_text(document, encoding="utf-8")
    except OSError as e:
        typer.echo(f"Compilation failed: cannot write to {out}: {e}", err=True)
        raise typer.Exit(code=1)

    logger.debug("Wrote %s.html, %s.js, %s.css and index.html", base_name, base_name, base_name)
    console.print(f"[green]Successfully compiled[/green] {file}", highlight=False)
    console.print(f"Output files written to {out}", highlight=False)


def format_listing(app_spec: AppSpec) -> str:
    """Render the text listing printed by ``sweb parse``."""
    lines = [
        "Parsed AST:",
        f"Models: {len(app_spec.models)}",
        f"Forms: {len(app_spec.forms)}",
        f"Views: {len(app_spec.views)}",
        f"Lists: {len(app_spec.lists)}",
        f"Pages: {len(app_spec.pages)}",
        "",
        "Models:",
    ]
    for model in app_spec.models:
        lines.append(f"- {model.name} ({len(model.fields)} fields)")
        for field in model.fields:
            line = f"  - {field.name}: {field.type}"
            if field.required:
                line += " (required)"
            if field.default is not None:
                line += f" (default: {json.dumps(field.default)})"
            lines.append(line)

    for heading, bindings in (
        ("Forms", app_spec.forms),
        ("Views", app_spec.views),
        ("Lists", app_spec.lists),
    ):
        lines.extend(["", f"{heading}:"])
        for binding in bindings:
            fields = ", ".join(binding.fields) if binding.fields else "(all)"
            lines.append(f"- {binding.name} (model: {binding.model}, fields: {fields})")

    lines.extend(["", "Pages:"])
    for page in app_spec.pages:
        components = ", ".join(page.components)
        lines.append(f"- {page.name} ({json.dumps(page.title)}, components: {components})")

    return "\n".join(lines)


@app.command(name="parse")
def parse_command(
    file: Path | None = typer.Argument(None, help="SWeb source file"),  # noqa: B008
    output_format: str = typer.Option(
        "text", "--format", "-f", help="Output format: text or json"
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to sweb.toml"),  # noqa: B008
) -> None:
    """Parse a .sweb file and print its declarations."""
    if output_format not in PARSE_FORMATS:
        typer.echo(f"Unknown format: {output_format} (expected text or json)", err=True)
        raise typer.Exit(code=1)

    text = _read_source(file, "parsing")
    assert file is not None

    try:
        options = discover_options(file, config)
        app_spec = parse_source(text, file, options)
    except SWebError as e:
        _report_error("Parsing failed", e, text)
        raise typer.Exit(code=1)

    if output_format == "json":
        dump = app_spec.model_dump(mode="json", by_alias=True, exclude_none=True)
        typer.echo(json.dumps(dump, indent=2))
    else:
        typer.echo(format_listing(app_spec))


@app.command(name="serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
) -> None:
    """Run the HTTP API for storing and compiling applications."""
    from .runtime.server import run_server

    run_server(host=host, port=port)


@app.command(name="help")
def help_command() -> None:
    """Show usage."""
    typer.echo(HELP_TEXT)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
