"""
Compiler options and the ``sweb.toml`` loader.

Options select between permissive parsing with silent recovery
and stricter checking. Example ``sweb.toml``::

    [compiler]
    lenient = false
    strict_types = true
    validate_field_refs = true
    app_title = "Inventory"
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import SWebError

CONFIG_FILENAME = "sweb.toml"


class CompileOptions(BaseModel):
    """
    Policy switches for parsing and generation.

    Attributes:
        lenient: Skip unrecognized tokens at top level, inside model bodies
            and as field modifiers instead of failing
        strict_types: Reject field types outside text/number/boolean/date
        validate_field_refs: Fail when a field subset names a field the
            bound model does not declare
        app_title: Heading of the shell used when no page is declared
        footer_text: Footer line of every generated shell
    """

    lenient: bool = True
    strict_types: bool = False
    validate_field_refs: bool = True
    app_title: str = "SWeb Application"
    footer_text: str = "Created with SWeb"

    model_config = ConfigDict(frozen=True, extra="forbid")


class ConfigError(SWebError):
    """Raised when a ``sweb.toml`` file cannot be read or is invalid."""


def load_options(path: Path) -> CompileOptions:
    """
    Load compiler options from the ``[compiler]`` table of a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        CompileOptions with file values over the defaults

    Raises:
        ConfigError: If the file is unreadable, not TOML, or has unknown keys
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    compiler = data.get("compiler", {})
    try:
        return CompileOptions.model_validate(compiler)
    except ValidationError as e:
        raise ConfigError(f"Invalid [compiler] settings in {path}:\n{e}") from e


def discover_options(source: Path, explicit: Path | None = None) -> CompileOptions:
    """
    Resolve options for a source file.

    An explicit config path wins; otherwise a ``sweb.toml`` beside the
    source is used when present, else the defaults.
    """
    if explicit is not None:
        return load_options(explicit)
    candidate = source.parent / CONFIG_FILENAME
    if candidate.is_file():
        return load_options(candidate)
    return CompileOptions()
