"""Tests for compiler options and sweb.toml loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sweb.core.errors import SWebError
from sweb.core.options import (
    CONFIG_FILENAME,
    CompileOptions,
    ConfigError,
    discover_options,
    load_options,
)


class TestDefaults:
    """Defaults reproduce the permissive source language."""

    def test_defaults(self) -> None:
        options = CompileOptions()
        assert options.lenient is True
        assert options.strict_types is False
        assert options.validate_field_refs is True
        assert options.app_title == "SWeb Application"
        assert options.footer_text == "Created with SWeb"

    def test_frozen(self) -> None:
        options = CompileOptions()
        with pytest.raises(ValidationError):
            options.lenient = False  # type: ignore[misc]

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CompileOptions(bogus=True)  # type: ignore[call-arg]


class TestLoadOptions:
    """Reading the [compiler] table."""

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text('[compiler]\nlenient = false\napp_title = "Inventory"\n')
        options = load_options(path)
        assert options.lenient is False
        assert options.app_title == "Inventory"
        assert options.strict_types is False

    def test_missing_table_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text('[other]\nkey = "value"\n')
        assert load_options(path) == CompileOptions()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[compiler\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_options(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[compiler]\nturbo = true\n")
        with pytest.raises(ConfigError, match="Invalid \\[compiler\\] settings"):
            load_options(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_options(tmp_path / "absent.toml")

    def test_config_error_is_sweb_error(self) -> None:
        assert issubclass(ConfigError, SWebError)


class TestDiscoverOptions:
    """Explicit path, then sweb.toml beside the source, then defaults."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        assert discover_options(tmp_path / "app.sweb") == CompileOptions()

    def test_sibling_file(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[compiler]\nstrict_types = true\n")
        assert discover_options(tmp_path / "app.sweb").strict_types is True

    def test_explicit_wins(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[compiler]\nstrict_types = true\n")
        explicit = tmp_path / "other.toml"
        explicit.write_text("[compiler]\nlenient = false\n")
        options = discover_options(tmp_path / "app.sweb", explicit)
        assert options.lenient is False
        assert options.strict_types is False
