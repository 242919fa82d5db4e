# src/carelocator/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/carelocator/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `CARELOCATOR_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (`CARELOCATOR_LOG_LEVEL`, `CARELOCATOR_CATALOG_PATH`)

Design rule:
- Tuning knobs live in YAML; the visual language (colors, radii) lives in
  `carelocator.render.styles`.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from carelocator.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `carelocator.config`."""
    text = resources.files("carelocator.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "CareLocator"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    # None means the sample catalog shipped with the package.
    path: str | None = None


class MapSettings(BaseModel):
    width: float = Field(640, gt=0)
    height: float = Field(320, gt=0)
    device_pixel_ratio: float = Field(1.0, gt=0, le=4)
    grid_spacing: float = Field(20, gt=0)
    bounds_padding_deg: float = Field(0.01, gt=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    map: MapSettings = Field(default_factory=MapSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    data = dict(data)
    log_level = os.getenv("CARELOCATOR_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    catalog_path = os.getenv("CARELOCATOR_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("CARELOCATOR_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
