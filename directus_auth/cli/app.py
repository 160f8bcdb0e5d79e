"""
Command-line entry point.

    directus-auth              Open the interactive menu
    directus-auth --json       Print the active credentials as JSON
    directus-auth --help       Show usage
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from directus_auth import __version__
from directus_auth.cli import display
from directus_auth.cli.menu import CredentialMenu
from directus_auth.errors import DirectusAuthError
from directus_auth.logging_setup import configure_logging
from directus_auth.settings import load_settings
from directus_auth.store import CredentialStore

logger = logging.getLogger(__name__)

_EPILOG = """\
JSON output:
  Other CLI tools can read the active credentials:

    directus-auth --json

  Returns: {"name":"...","url":"...","token":"..."}

examples:
  # Get just the URL
  directus-auth --json | jq -r '.url'

  # Get just the token
  directus-auth --json | jq -r '.token'

  # Use in a curl command
  curl -H "Authorization: Bearer $(directus-auth --json | jq -r '.token')" \\
       "$(directus-auth --json | jq -r '.url')/items/posts"
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="directus-auth",
        description="Directus Auth Manager: store, switch and validate Directus credentials.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-j", "--json", action="store_true", help="output active credentials as JSON")
    parser.add_argument("--config", metavar="PATH", help="settings.yaml to use instead of the default")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def output_json(store: CredentialStore) -> int:
    active = store.get_active_credentials()
    if active is None:
        print("No active credentials set", file=sys.stderr)
        return 1
    print(
        json.dumps(
            {"name": active.name, "url": active.credentials.url, "token": active.credentials.token},
            separators=(",", ":"),
        )
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ValueError as exc:
        display.error(f"Config error: {exc}")
        return 1

    configure_logging(settings, verbose=args.verbose)
    store = CredentialStore(settings.store_path)
    logger.debug("Using credential file %s", store.path)

    if args.json:
        return output_json(store)

    try:
        CredentialMenu(store, request_timeout=settings.request_timeout).run()
    except (KeyboardInterrupt, EOFError):
        display.console.print("\n[dim]Goodbye![/]\n")
        return 0
    except DirectusAuthError as exc:
        display.error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
