"""
Embedding interface for other command-line tools.

These helpers hand back a flat CredentialSelection so callers can use
`sel.url` and `sel.token` directly, whether the set came from the store or
was typed in on the spot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from directus_auth.cli import selector
from directus_auth.cli.display import console, success
from directus_auth.errors import NoCredentialsError
from directus_auth.models import Credentials
from directus_auth.store import CredentialStore, default_store

CredentialSource = Literal["saved", "manual"]


@dataclass(frozen=True)
class CredentialSelection:
    name: str
    url: str
    token: str
    source: CredentialSource = "saved"


def _saved(name: str, creds: Credentials) -> CredentialSelection:
    return CredentialSelection(name=name, url=creds.url, token=creds.token, source="saved")


def prompt_for_credentials(
    message: str = "Select Directus credentials:",
    *,
    allow_manual: bool = True,
    save_manual: bool = True,
    use_active_if_available: bool = False,
    store: CredentialStore | None = None,
) -> CredentialSelection:
    """
    Let the user pick a saved credential set or type one in.

    Args:
        message: Prompt shown above the choice.
        allow_manual: Offer manual URL/token entry alongside saved sets.
        save_manual: After manual entry, offer to save the new set.
        use_active_if_available: Skip the prompt when an active set exists.
        store: Store to read from; defaults to the configured one.

    Raises:
        NoCredentialsError: nothing is saved and manual entry is disallowed.
    """
    store = store or default_store()

    if use_active_if_available:
        active = store.get_active_credentials()
        if active:
            return _saved(active.name, active.credentials)

    saved = store.get_all_credentials()
    if not saved:
        if not allow_manual:
            raise NoCredentialsError()
        console.print("[dim]No saved credentials found. Please enter credentials manually.[/]\n")
        return _prompt_manual_entry(store, save_manual)

    trailing = "Enter credentials manually..." if allow_manual else None
    chosen = selector.select_credentials(store, message, trailing_label=trailing)
    if chosen is None:
        return _prompt_manual_entry(store, save_manual)
    return _saved(chosen, saved[chosen])


def _prompt_manual_entry(store: CredentialStore, save: bool) -> CredentialSelection:
    creds = selector.ask_credentials()
    name = "manual"

    if save and selector.confirm_save():
        name = selector.ask_name("Name for these credentials", default=selector.default_name_for(creds.url))
        if not store.has_credentials(name) or selector.confirm_overwrite(name):
            store.add_credentials(name, creds)
            success(f'Credentials saved as "{name}"')

    return CredentialSelection(name=name, url=creds.url, token=creds.token, source="manual")


def get_active(store: CredentialStore | None = None) -> CredentialSelection | None:
    """The active credential set, without prompting. None when nothing is active."""
    active = (store or default_store()).get_active_credentials()
    if active is None:
        return None
    return _saved(active.name, active.credentials)


def get_by_name(name: str, store: CredentialStore | None = None) -> CredentialSelection | None:
    creds = (store or default_store()).get_credentials(name)
    if creds is None:
        return None
    return _saved(name, creds)


def list_saved(store: CredentialStore | None = None) -> list[str]:
    return list((store or default_store()).get_all_credentials())
