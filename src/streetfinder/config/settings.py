# src/streetfinder/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/streetfinder/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `STREETFINDER_LOG_LEVEL`, `STREETFINDER_WFS_BASE_URL`)
- an external YAML file via `STREETFINDER_CONFIG_PATH`

Design rule:
- Endpoint details and search limits live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from streetfinder.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `streetfinder.config`."""
    text = resources.files("streetfinder.config").joinpath(filename).read_text(encoding="utf-8")
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
    name: str = "StreetFinder"
    http_timeout_seconds: float = Field(15, gt=0)
    log_level: str = "INFO"


class WfsFieldSettings(BaseModel):
    """Property names of one road segment feature."""

    street: str = "stt_naam"
    place: str = "wpsnaamnen"
    municipality: str = "gme_naam"
    geometry: str = "geom"


class WfsSettings(BaseModel):
    base_url: str
    version: str = "2.0.0"
    type_name: str = "nwbwegen:wegvakken"
    page_size: int = Field(200, ge=1)
    fields: WfsFieldSettings = Field(default_factory=WfsFieldSettings)
    # The service advertises its next page under an internal path; swap it for the public one.
    next_link_find: str = ":/cgi-bin/mapserv.fcgi"
    next_link_replace: str = "/nwbwegen/wfs"


class ProjectionSettings(BaseModel):
    geographic_crs: str = "EPSG:4326"
    projected_crs: str = "EPSG:28992"


class SearchSettings(BaseModel):
    default_radius_m: int = Field(100, ge=1)
    max_radius_m: int = Field(2000, ge=1)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    wfs: WfsSettings
    projection: ProjectionSettings = Field(default_factory=ProjectionSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("STREETFINDER_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    timeout = os.getenv("STREETFINDER_HTTP_TIMEOUT_SECONDS")
    if timeout:
        data.setdefault("app", {})["http_timeout_seconds"] = float(timeout)

    base_url = os.getenv("STREETFINDER_WFS_BASE_URL")
    if base_url:
        data.setdefault("wfs", {})["base_url"] = base_url

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("STREETFINDER_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
