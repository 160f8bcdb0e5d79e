"""
Settings loading from settings.yaml.

Settings are optional: a missing file means defaults everywhere. They control
where the credential document lives and how logging is set up, not the
credentials themselves.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

CONFIG_DIR = Path.home() / ".config" / "directus-auth-manager"
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"
DEFAULT_STORE_PATH = CONFIG_DIR / "config.json"

SETTINGS_ENV = "DIRECTUS_AUTH_SETTINGS"
STORE_ENV = "DIRECTUS_AUTH_CONFIG"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    store_path: Path = field(default_factory=lambda: DEFAULT_STORE_PATH)
    log_level: str = "WARNING"
    log_file: Path | None = None
    request_timeout: float | None = None   # None = transport default


def settings_path() -> Path:
    """Settings file location, honouring the DIRECTUS_AUTH_SETTINGS override."""
    override = os.environ.get(SETTINGS_ENV)
    return Path(override).expanduser() if override else DEFAULT_SETTINGS_PATH


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load settings.yaml, falling back to defaults when it does not exist.

    The DIRECTUS_AUTH_CONFIG environment variable wins over store_path.

    Raises:
        ValueError: the file exists but cannot be read, or its fields are absent or invalid.
    """
    cfg_path = Path(path).expanduser() if path is not None else settings_path()

    raw: object = {}
    if cfg_path.exists():
        try:
            with cfg_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ValueError(f"Cannot read settings file {cfg_path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid settings.yaml: {exc}") from exc

    try:
        if not isinstance(raw, dict):
            raise TypeError(f"expected a mapping, got {type(raw).__name__}")

        store_path = Path(raw.get("store_path") or DEFAULT_STORE_PATH).expanduser()
        log_file = raw.get("log_file")
        timeout = raw.get("request_timeout")
        settings = Settings(
            store_path=store_path,
            log_level=str(raw.get("log_level", "WARNING")).upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
            request_timeout=float(timeout) if timeout is not None else None,
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid settings.yaml structure: {exc}") from exc

    env_store = os.environ.get(STORE_ENV)
    if env_store:
        settings.store_path = Path(env_store).expanduser()

    _validate(settings)
    return settings


def _validate(settings: Settings) -> None:
    if settings.log_level not in _LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {_LOG_LEVELS}, got '{settings.log_level}'"
        )
    if settings.request_timeout is not None and settings.request_timeout <= 0:
        raise ValueError("request_timeout must be > 0 when provided")
