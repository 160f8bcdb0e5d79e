"""
Typed data model for the credential store and the validator.

The on-disk document is plain JSON; these dataclasses are the in-memory view
so the rest of the package never touches raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Credentials:
    url: str    # absolute http(s) base URL of the Directus instance
    token: str  # static access token, sent as a bearer credential

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "token": self.token}


@dataclass
class Config:
    active: str | None = None
    credentials: dict[str, Credentials] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "credentials": {name: c.to_dict() for name, c in self.credentials.items()},
        }

    @classmethod
    def from_dict(cls, raw: object) -> Config:
        """
        Build a Config from the parsed JSON document.

        Raises:
            ValueError: the document does not have the expected shape.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"config root must be an object, got {type(raw).__name__}")

        active = raw.get("active")
        if active is not None and not isinstance(active, str):
            raise ValueError(f"'active' must be a string or null, got {active!r}")

        creds_raw = raw.get("credentials") or {}
        if not isinstance(creds_raw, dict):
            raise ValueError("'credentials' must be an object")

        credentials: dict[str, Credentials] = {}
        for name, entry in creds_raw.items():
            if not isinstance(entry, dict):
                raise ValueError(f"credentials entry {name!r} must be an object")
            url, token = entry.get("url"), entry.get("token")
            if not isinstance(url, str) or not isinstance(token, str):
                raise ValueError(f"credentials entry {name!r} needs string 'url' and 'token'")
            credentials[name] = Credentials(url=url, token=token)

        # A dangling active pointer falls back to the first stored name.
        if active is not None and active not in credentials:
            active = next(iter(credentials), None)

        return cls(active=active, credentials=credentials)


@dataclass
class ActiveCredentials:
    name: str
    credentials: Credentials


@dataclass(frozen=True)
class UserInfo:
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None

    @property
    def display_name(self) -> str:
        """First and last name when present, else the email address."""
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or self.email


@dataclass(frozen=True)
class ValidationResult:
    name: str
    success: bool
    message: str
    user: UserInfo | None = None
