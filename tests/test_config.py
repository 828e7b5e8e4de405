"""Tests for typegen.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from typegen.config import get_data_dir, load_project_config, resolve_config
from typegen.exceptions import ConfigError


class TestDataDir:
    """Crash log directory resolution."""

    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("typegen.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        result = get_data_dir()
        assert result == tmp_path / "data" / "typegen"
        assert result.is_dir()

    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("typegen.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_dir() == tmp_path / ".local" / "share" / "typegen"

    def test_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("typegen.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_dir() == tmp_path / ".typegen"


class TestProjectConfig:
    """./typegen.json loading."""

    def test_missing_file(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        (isolated_config / "typegen.json").write_text(json.dumps({"input": "api.yml"}))
        assert load_project_config() == {"input": "api.yml"}

    def test_invalid_json(self, isolated_config: Path) -> None:
        (isolated_config / "typegen.json").write_text("{nope")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object(self, isolated_config: Path) -> None:
        (isolated_config / "typegen.json").write_text("[]")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


class TestResolveConfig:
    """Precedence: CLI > environment > project file > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config.input is None
        assert config.output is None
        assert config.operations is True
        assert config.banner is True
        assert config.indent == 2

    def test_project_file(self, isolated_config: Path) -> None:
        (isolated_config / "typegen.json").write_text(
            json.dumps({"input": "api.yml", "operations": False, "indent": 4})
        )
        config = resolve_config()
        assert config.input == "api.yml"
        assert config.operations is False
        assert config.indent == 4

    def test_env_overrides_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (isolated_config / "typegen.json").write_text(json.dumps({"input": "api.yml", "output": "a.ts"}))
        monkeypatch.setenv("TYPEGEN_INPUT", "env.yml")
        monkeypatch.setenv("TYPEGEN_OUTPUT", "env.ts")
        config = resolve_config()
        assert config.input == "env.yml"
        assert config.output == "env.ts"

    def test_cli_overrides_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TYPEGEN_INPUT", "env.yml")
        (isolated_config / "typegen.json").write_text(json.dumps({"banner": True}))
        config = resolve_config(cli_input="cli.yml", cli_banner=False, cli_operations=False)
        assert config.input == "cli.yml"
        assert config.banner is False
        assert config.operations is False

    def test_invalid_value(self, isolated_config: Path) -> None:
        (isolated_config / "typegen.json").write_text(json.dumps({"indent": 0}))
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
