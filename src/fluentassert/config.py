"""Configuration for failure message rendering.

Settings are read from the ``[tool.fluentassert]`` table of the nearest
``pyproject.toml`` and may be overridden with environment variables
(``FLUENTASSERT_MAX_ITEMS``, ``FLUENTASSERT_MAX_STRING``,
``FLUENTASSERT_NULL_REPR``), including ones declared in a ``.env`` file.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

PYPROJECT_NAME = "pyproject.toml"
ENV_PREFIX = "FLUENTASSERT_"


class ConfigError(ValueError):
    """Raised when the fluentassert configuration is invalid."""


class FluentConfig(BaseModel):
    """Rendering limits applied to values embedded in failure messages."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_items: int = Field(default=32, ge=1)
    max_string: int = Field(default=200, ge=1)
    null_repr: str = "<null>"


DEFAULT_CONFIG = FluentConfig()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Return the nearest pyproject.toml at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT_NAME
        if candidate.is_file():
            return candidate
    return None


def _read_tool_table(pyproject: Path) -> dict[str, Any]:
    try:
        with pyproject.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Ignoring unreadable %s: %s", pyproject, exc)
        return {}
    table = data.get("tool", {})
    if isinstance(table, dict):
        table = table.get("fluentassert", {})
    if not isinstance(table, dict):
        msg = f"Invalid fluentassert configuration in {pyproject}: [tool.fluentassert] must be a table"
        raise ConfigError(msg)
    return dict(table)


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for field_name in ("max_items", "max_string", "null_repr"):
        value = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value is not None:
            overrides[field_name] = value
    return overrides


def load_config(start: Path | None = None) -> FluentConfig:
    """Load configuration from pyproject.toml and the environment.

    Args:
        start: Directory to start searching for pyproject.toml from.
            Defaults to the current working directory.

    Returns:
        The resolved FluentConfig; defaults when nothing is configured.

    Raises:
        ConfigError: If the configured values fail validation.
    """
    load_dotenv(find_dotenv(usecwd=True))

    values: dict[str, Any] = {}
    pyproject = find_pyproject(start)
    if pyproject is not None:
        values.update(_read_tool_table(pyproject))
    values.update(_env_overrides())

    if not values:
        return DEFAULT_CONFIG

    try:
        return FluentConfig.model_validate(values)
    except ValidationError as exc:
        msg = f"Invalid fluentassert configuration: {exc}"
        raise ConfigError(msg) from exc


__all__ = ["ConfigError", "DEFAULT_CONFIG", "FluentConfig", "find_pyproject", "load_config"]
