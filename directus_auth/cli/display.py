"""
Rich-based terminal output.

This is the ONLY place where the interactive CLI prints. Prompts live in
selector.py; the store and validator never print.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from directus_auth.models import ActiveCredentials, Credentials, ValidationResult

console = Console(legacy_windows=False)
err_console = Console(stderr=True, legacy_windows=False)


def mask_token(token: str) -> str:
    """Show only the first and last 4 characters of a token."""
    if len(token) <= 12:
        return "****"
    return f"{token[:4]}...{token[-4:]}"


def header(active: ActiveCredentials | None) -> None:
    console.clear()
    if active:
        subtitle = f"[dim]Active:[/] [green]{escape(active.name)}[/] [dim]({escape(active.credentials.url)})[/]"
    else:
        subtitle = "[dim]Active: None[/]"
    console.print()
    console.print(
        Panel(
            subtitle,
            title="[bold cyan] Directus Auth Manager [/]",
            border_style="cyan",
            expand=False,
        )
    )


def section(title: str) -> None:
    console.print(f"\n  [bold]{title}[/]\n")


def success(message: str) -> None:
    console.print(f"[green]✓[/] {escape(message)}")


def warn(message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/]")


def error(message: str) -> None:
    err_console.print(f"[red]Error:[/] {escape(message)}")


def credential_list(credentials: dict[str, Credentials], active_name: str | None) -> None:
    if not credentials:
        warn("No credentials saved.")
        return

    for name, creds in credentials.items():
        if name == active_name:
            console.print(f"[green]● [bold]{escape(name)}[/bold] (active)[/]")
        else:
            console.print(f"  {escape(name)}")
        console.print(f"    [dim]URL:   {escape(creds.url)}[/]", highlight=False)
        console.print(f"    [dim]Token: {escape(mask_token(creds.token))}[/]", highlight=False)
        console.print()


def active_details(active: ActiveCredentials | None) -> None:
    if active is None:
        warn("No active credentials set.")
        return
    console.print(f"  Name:  [green bold]{escape(active.name)}[/]")
    console.print(f"  URL:   {escape(active.credentials.url)}", highlight=False)
    console.print(f"  Token: {escape(mask_token(active.credentials.token))}", highlight=False)
    console.print()


def validation_result(result: ValidationResult) -> None:
    if result.success:
        console.print(f"[green]✓ {escape(result.name)}: {escape(result.message)}[/]")
        if result.user:
            console.print(
                f"  [dim]User: {escape(result.user.display_name)} ({escape(result.user.id)})[/]",
                highlight=False,
            )
    else:
        console.print(f"[red]✗ {escape(result.name)}: {escape(result.message)}[/]")


def validation_summary(results: list[ValidationResult]) -> None:
    table = Table(show_header=True, header_style="bold", border_style="dim")
    table.add_column("Name", min_width=12)
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for r in results:
        status = "[green]valid[/]" if r.success else "[red]failed[/]"
        details = f"{r.user.display_name} ({r.user.id})" if r.user else r.message
        table.add_row(escape(r.name), status, escape(details))

    console.print(table)
