from __future__ import annotations

import logging
import os
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

__all__ = [
    "APP_SLUG",
    "CONFIG_ENV_VAR",
    "CollectionSettings",
    "user_settings_path",
    "load_settings",
    "get_settings",
    "configure",
    "reset_settings",
]

APP_SLUG = "observable-collections"
CONFIG_ENV_VAR = "OBSERVABLE_COLLECTIONS_CONFIG"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")

logger = logging.getLogger(__name__)


class CollectionSettings(BaseModel):
    """Runtime behaviour shared by dispatchers and collections."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    insert_bounds: Literal["strict", "clamp"] = Field(
        "strict", description="'strict' rejects out-of-range insert indices, 'clamp' pulls them into range"
    )
    trace_dispatch: bool = Field(False, description="Log every triggered event at DEBUG level")
    log_level: str = Field("WARNING", description="Level used by configure_logging() when none is given")

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def user_settings_path() -> Path:
    """Location of the optional per-user settings file."""
    return Path(user_config_dir(appname=APP_SLUG)) / "settings.yaml"


def _parse(text: str, source: str) -> CollectionSettings:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{source}: invalid YAML ({exc})") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{source}: settings must be a mapping, got {type(raw).__name__}")
    try:
        return CollectionSettings(**raw)
    except ValidationError as exc:
        raise ConfigError(f"{source}: {exc}") from exc


def load_settings(path: Optional[Union[str, Path]] = None) -> CollectionSettings:
    """Load settings from YAML.

    Resolution order: the explicit ``path``, the file named by the
    ``OBSERVABLE_COLLECTIONS_CONFIG`` environment variable, ``settings.yaml``
    in the user config directory, then the embedded ``defaults.yaml``.
    """
    if path is None:
        env = os.getenv(CONFIG_ENV_VAR, "").strip()
        if env:
            path = env
        else:
            candidate = user_settings_path()
            if candidate.is_file():
                path = candidate

    if path is None:
        data = resource_files("observable_collections").joinpath("defaults.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default settings")
        return _parse(data, "defaults.yaml")

    p = Path(path)
    try:
        data = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"{p}: cannot read settings ({exc})") from exc
    settings = _parse(data, str(p))
    logger.info("Settings loaded from %s", p)
    return settings


_SETTINGS: Optional[CollectionSettings] = None


def get_settings() -> CollectionSettings:
    """Return the process-wide settings, loading them on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def configure(settings: Optional[CollectionSettings] = None, **overrides: Any) -> CollectionSettings:
    """Replace the process-wide settings.

    ``overrides`` are applied on top of ``settings`` (or the current settings
    when none are given) and validated like file content.
    """
    global _SETTINGS
    base = settings if settings is not None else get_settings()
    if overrides:
        merged: Dict[str, Any] = base.model_dump()
        merged.update(overrides)
        try:
            base = CollectionSettings(**merged)
        except ValidationError as exc:
            raise ConfigError(f"invalid settings override: {exc}") from exc
    _SETTINGS = base
    logger.debug("Settings configured: %s", base)
    return base


def reset_settings() -> None:
    """Forget the process-wide settings so the next access reloads them."""
    global _SETTINGS
    _SETTINGS = None
