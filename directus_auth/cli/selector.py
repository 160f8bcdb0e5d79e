"""
Interactive prompts: picking a saved credential set and entering a new one.

Input validation (names, URLs, empty tokens) happens here, before anything
reaches the store.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from directus_auth.cli.display import console, warn
from directus_auth.models import Credentials
from directus_auth.store import CredentialStore

_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def name_error(name: str) -> str | None:
    if not name.strip():
        return "Name is required"
    if not _NAME_RE.match(name):
        return "Name can only contain letters, numbers, underscores, and hyphens"
    return None


def url_error(url: str) -> str | None:
    if not url.strip():
        return "URL is required"
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return "Please enter a valid URL"
    return None


def default_name_for(url: str) -> str:
    """First label of the URL host, e.g. "cms" for https://cms.example.com."""
    host = urlparse(url).hostname or ""
    return host.split(".")[0]


def ask_name(message: str = "Credential name (e.g., production, staging)", default: str | None = None) -> str:
    while True:
        if default:
            name = Prompt.ask(message, default=default).strip()
        else:
            name = Prompt.ask(message).strip()
        problem = name_error(name)
        if problem is None:
            return name
        console.print(f"  [red]{problem}[/]")


def ask_credentials() -> Credentials:
    """Prompt for a server URL and a static token."""
    while True:
        url = Prompt.ask("Directus server URL").strip()
        problem = url_error(url)
        if problem is None:
            break
        console.print(f"  [red]{problem}[/]")

    while True:
        token = Prompt.ask("Static access token", password=True).strip()
        if token:
            break
        console.print("  [red]Token is required[/]")

    return Credentials(url=url, token=token)


def confirm_overwrite(name: str) -> bool:
    return Confirm.ask(f'Credentials "{name}" already exist. Overwrite?', default=False)


def select_credentials(
    store: CredentialStore,
    message: str,
    *,
    trailing_label: str | None = "Cancel",
) -> str | None:
    """
    Show saved credential sets in a numbered table and prompt for one.

    Entry 0 is `trailing_label` (cancel, or manual entry for embedders) and
    returns None; pass trailing_label=None to force a saved choice.
    Returns None immediately when nothing is saved.
    """
    credentials = store.get_all_credentials()
    active_name = store.get_active_name()
    names = list(credentials)

    if not names:
        warn("\nNo credentials saved yet.")
        return None

    table = Table(show_header=True, header_style="bold", border_style="dim", show_lines=False)
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Name", min_width=16)
    table.add_column("URL", style="dim")

    for i, name in enumerate(names, 1):
        label = f"{escape(name)} [green](active)[/]" if name == active_name else escape(name)
        table.add_row(str(i), label, escape(credentials[name].url))
    if trailing_label is not None:
        table.add_row("0", f"[cyan]{escape(trailing_label)}[/]", "")

    console.print()
    console.print(table)

    choices = [str(i) for i in range(1, len(names) + 1)]
    if trailing_label is not None:
        choices.insert(0, "0")

    idx = IntPrompt.ask(f"\n[bold]{message}[/]", choices=choices, show_choices=False)
    if idx == 0:
        return None
    return names[idx - 1]


def confirm_save() -> bool:
    return Confirm.ask("Save these credentials for future use?", default=True)


def confirm_remove(name: str) -> bool:
    return Confirm.ask(f'Are you sure you want to remove "{name}"?', default=False)
