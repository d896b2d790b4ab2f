"""Loader for the YAML tax schedule tables bundled with truewage."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from truewage.utils.exceptions import ConfigError

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML table whose top level is a mapping.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or does not
            hold a mapping.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"tax table not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"malformed YAML in {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping, got {type(data).__name__}")
    return data


def load_package_yaml(relative_path: str) -> dict[str, Any]:
    """Read a table shipped inside the package, e.g. ``"taxes/tables/uk_2025_26.yaml"``."""
    return load_yaml(PACKAGE_ROOT / relative_path)


def list_package_tables(relative_dir: str = "taxes/tables") -> list[str]:
    """Return the stems of YAML tables shipped under ``relative_dir``, sorted."""
    return sorted(p.stem for p in (PACKAGE_ROOT / relative_dir).glob("*.yaml"))
