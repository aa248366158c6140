"""Configuration loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import AppConfig, load_config


def read_yaml(path: str | Path) -> Any:
    """Load a YAML (or JSON) document, treating an empty file as an empty mapping."""
    with Path(path).open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    return {} if loaded is None else loaded


def load_app_config(path: str | Path) -> AppConfig:
    return load_config(read_yaml(path))


__all__ = ["read_yaml", "load_app_config"]
