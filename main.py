"""
Directus Auth Manager — entry point.

Wires together:  settings → logging → credential store → menu / --json output
"""

from __future__ import annotations

import sys

from directus_auth.cli.app import main

if __name__ == "__main__":
    sys.exit(main())
