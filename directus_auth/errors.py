"""Exceptions raised by directus_auth.

Validation failures are never raised; they come back as ValidationResult
values. Only caller-facing misuse and settings problems end up here.
"""

from __future__ import annotations


class DirectusAuthError(Exception):
    """Base class for errors surfaced to callers of directus_auth."""


class NoCredentialsError(DirectusAuthError):
    """Raised when a credential set is required but none is saved."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or 'No saved credentials available. Run "directus-auth" to add credentials.'
        )
