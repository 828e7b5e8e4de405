"""Configuration resolution for generation runs.

A run is configured by a :class:`~typegen.models.GeneratorConfig` assembled
from, in order of precedence (high to low):

1. CLI flags;
2. environment variables ``TYPEGEN_INPUT`` and ``TYPEGEN_OUTPUT``;
3. the project file ``./typegen.json``;
4. model defaults.

The module also resolves the data directory that crash logs are written
to (XDG compliant on Linux/BSD, ``~/.typegen/`` elsewhere).
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from typegen.exceptions import ConfigError
from typegen.models import GeneratorConfig

_APP_NAME = "typegen"
_PROJECT_CONFIG_FILENAME = "typegen.json"

ENV_INPUT = "TYPEGEN_INPUT"
ENV_OUTPUT = "TYPEGEN_OUTPUT"


# --- Data directory ---


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/typegen/`` (default ``~/.local/share/typegen/``).
    On macOS/Windows: ``~/.typegen/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``typegen.json`` from *directory* (default: the working directory).

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_input: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_operations: Optional[bool] = None,
    cli_banner: Optional[bool] = None,
    directory: Optional[Path] = None,
) -> GeneratorConfig:
    """Merge CLI flags, environment and project config into one config.

    ``None`` for a CLI argument means "not given on the command line".

    Raises:
        ConfigError: If the project file is invalid or the merged values
            fail validation.
    """
    values: dict[str, Any] = dict(load_project_config(directory) or {})

    env_input = os.environ.get(ENV_INPUT)
    if env_input:
        values["input"] = env_input
    env_output = os.environ.get(ENV_OUTPUT)
    if env_output:
        values["output"] = env_output

    if cli_input is not None:
        values["input"] = cli_input
    if cli_output is not None:
        values["output"] = cli_output
    if cli_operations is not None:
        values["operations"] = cli_operations
    if cli_banner is not None:
        values["banner"] = cli_banner

    try:
        return GeneratorConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
