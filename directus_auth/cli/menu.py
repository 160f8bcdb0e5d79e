"""
Interactive main menu.

Each action is a small handler over the store; validation handlers drive the
async validator with asyncio.run since the menu itself is synchronous.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from rich.markup import escape
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from directus_auth.cli import display, selector
from directus_auth.cli.display import console
from directus_auth.store import CredentialStore
from directus_auth.validator import validate_all_credentials, validate_credentials


class CredentialMenu:
    def __init__(self, store: CredentialStore, *, request_timeout: float | None = None) -> None:
        self._store = store
        self._timeout = request_timeout
        self._actions: list[tuple[str, str, Callable[[], None] | None]] = [
            ("add", "Add credentials", self.add),
            ("list", "List all credentials", self.list_all),
            ("use", "Switch active credentials", self.use),
            ("current", "View current credentials", self.current),
            ("validate", "Validate specific credentials", self.validate),
            ("validate-all", "Validate all credentials", self.validate_all),
            ("remove", "Remove credentials", self.remove),
            ("exit", "Exit", None),
        ]

    # ------------------------------------------------------------------ #
    # Loop                                                                 #
    # ------------------------------------------------------------------ #

    def run(self) -> None:
        while True:
            display.header(self._store.get_active_credentials())
            handler = self._choose_action()
            if handler is None:
                console.print("\n[dim]Goodbye![/]\n")
                return
            handler()
            Prompt.ask("\n[dim]Press Enter to continue...[/]", default="", show_default=False)

    def _choose_action(self) -> Callable[[], None] | None:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("#", style="dim", justify="right")
        table.add_column("Action")
        for i, (_, label, _) in enumerate(self._actions, 1):
            table.add_row(str(i), label)
        console.print(table)

        choices = [str(i) for i in range(1, len(self._actions) + 1)]
        idx = IntPrompt.ask("\n[bold]What would you like to do?[/]", choices=choices, show_choices=False)
        return self._actions[idx - 1][2]

    # ------------------------------------------------------------------ #
    # Actions                                                              #
    # ------------------------------------------------------------------ #

    def add(self) -> None:
        display.section("Add New Credentials")
        name = selector.ask_name()
        if self._store.has_credentials(name) and not selector.confirm_overwrite(name):
            display.warn("Operation cancelled.")
            return

        creds = selector.ask_credentials()
        self._store.add_credentials(name, creds)
        display.success(f'Credentials "{name}" saved successfully.')
        if self._store.get_active_name() == name:
            console.print("  [blue](set as active)[/]")

    def remove(self) -> None:
        display.section("Remove Credentials")
        name = selector.select_credentials(self._store, "Select credentials to remove")
        if name is None:
            return
        if not selector.confirm_remove(name):
            display.warn("Operation cancelled.")
            return
        self._store.remove_credentials(name)
        display.success(f'Credentials "{name}" removed.')

    def list_all(self) -> None:
        display.section("Saved Credentials")
        display.credential_list(self._store.get_all_credentials(), self._store.get_active_name())

    def use(self) -> None:
        display.section("Switch Active Credentials")
        name = selector.select_credentials(self._store, "Select credentials to activate")
        if name is None:
            return
        if self._store.set_active(name):
            display.success(f'Now using "{name}" as active credentials.')

    def current(self) -> None:
        display.section("Current Active Credentials")
        display.active_details(self._store.get_active_credentials())

    def validate(self) -> None:
        display.section("Validate Credentials")
        name = selector.select_credentials(self._store, "Select credentials to validate")
        if name is None:
            return
        creds = self._store.get_credentials(name)
        if creds is None:
            return

        with console.status(f'Validating "{escape(name)}"…'):
            result = asyncio.run(validate_credentials(name, creds, timeout=self._timeout))
        display.validation_result(result)

    def validate_all(self) -> None:
        display.section("Validate All Credentials")
        credentials = self._store.get_all_credentials()
        if not credentials:
            display.warn("No credentials to validate.")
            return

        with console.status(f"Validating {len(credentials)} credential set(s)…"):
            results = asyncio.run(validate_all_credentials(credentials, timeout=self._timeout))
        for result in results:
            display.validation_result(result)
        console.print()
        display.validation_summary(results)
