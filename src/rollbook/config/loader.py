"""Resolve repository config from YAML/JSON files, env and overrides."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import RepositoryConfig

CONFIG_ENV_VAR = "ROLLBOOK_CONFIG"


class ConfigLoadError(ValueError):
    """Raised when config cannot be read, parsed or validated."""


def load_config(path: str | Path) -> RepositoryConfig:
    """Read one config file and validate it."""
    return resolve_config(path)


def resolve_config(
    path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> RepositoryConfig:
    """Merge file settings with explicit overrides and validate the result.

    Overrides whose value is None are ignored, so unset CLI flags fall through
    to the file (or to the schema defaults when no file is given).
    """
    settings: dict[str, Any] = {}
    if path is not None:
        settings.update(_read_settings(Path(path)))
    for key, value in (overrides or {}).items():
        if value is not None:
            settings[key] = value

    try:
        return RepositoryConfig.model_validate(settings)
    except ValidationError as exc:
        source = path if path is not None else "overrides"
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigLoadError(f"Invalid config {source}: {problems}") from exc


def config_from_env(env_var: str = CONFIG_ENV_VAR) -> RepositoryConfig:
    """Load the file named by ``env_var``, or defaults when it is unset."""
    configured = os.getenv(env_var, "").strip()
    return resolve_config(configured or None)


def _read_settings(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    try:
        with config_path.open("r", encoding="utf-8") as file:
            if suffix in {".yaml", ".yml"}:
                parsed = yaml.safe_load(file)
            elif suffix == ".json":
                parsed = json.load(file)
            else:
                raise ConfigLoadError(
                    f"Unsupported config format '{suffix}'. Use .yaml/.yml or .json."
                )
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigLoadError(f"Could not parse config {config_path}: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigLoadError("Config root must be a JSON/YAML object.")
    return parsed
