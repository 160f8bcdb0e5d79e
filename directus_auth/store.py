"""
Credential store backed by a single JSON document.

Every operation re-reads the file and every mutation rewrites it in full, so
nothing is cached between calls and separate CLI invocations always agree.
A missing or unreadable document is treated as empty; write failures
propagate to the caller.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from directus_auth.models import ActiveCredentials, Config, Credentials
from directus_auth.settings import Settings, load_settings

logger = logging.getLogger(__name__)


class CredentialStore:
    """CRUD over named credential sets plus the single "active" pointer."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------ #
    # Document I/O                                                         #
    # ------------------------------------------------------------------ #

    def read_config(self) -> Config:
        if not self._path.exists():
            return Config()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return Config.from_dict(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValueError) as exc:
            logger.warning("Ignoring unreadable credential file %s: %s", self._path, exc)
            return Config()

    def write_config(self, config: Config) -> None:
        """
        Replace the document atomically.

        The content goes to an owner-only (0o600) temp file beside the target,
        which is then renamed over it, so readers never see a partial file.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(config.to_dict(), indent=2)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    def get_all_credentials(self) -> dict[str, Credentials]:
        return self.read_config().credentials

    def get_credentials(self, name: str) -> Credentials | None:
        return self.read_config().credentials.get(name)

    def has_credentials(self, name: str) -> bool:
        return name in self.read_config().credentials

    def get_active_name(self) -> str | None:
        return self.read_config().active

    def get_active_credentials(self) -> ActiveCredentials | None:
        config = self.read_config()
        if config.active is None or config.active not in config.credentials:
            return None
        return ActiveCredentials(name=config.active, credentials=config.credentials[config.active])

    # ------------------------------------------------------------------ #
    # Mutations                                                            #
    # ------------------------------------------------------------------ #

    def add_credentials(self, name: str, credentials: Credentials) -> None:
        """Insert or overwrite a credential set. The first set ever stored becomes active."""
        config = self.read_config()
        config.credentials[name] = credentials
        if len(config.credentials) == 1:
            config.active = name
        self.write_config(config)
        logger.info("Saved credentials %r", name)

    def remove_credentials(self, name: str) -> bool:
        """
        Delete a credential set.

        Returns False without touching the file when the name is unknown.
        Removing the active set promotes the first remaining set, or clears
        the pointer when none remain.
        """
        config = self.read_config()
        if name not in config.credentials:
            return False

        del config.credentials[name]
        if config.active == name:
            config.active = next(iter(config.credentials), None)

        self.write_config(config)
        logger.info("Removed credentials %r (active is now %r)", name, config.active)
        return True

    def set_active(self, name: str) -> bool:
        config = self.read_config()
        if name not in config.credentials:
            return False
        config.active = name
        self.write_config(config)
        logger.info("Active credentials set to %r", name)
        return True


def default_store(settings: Settings | None = None) -> CredentialStore:
    """Store at the configured location (settings.yaml / DIRECTUS_AUTH_CONFIG)."""
    settings = settings or load_settings()
    return CredentialStore(settings.store_path)
