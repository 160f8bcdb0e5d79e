import sys

from directus_auth.cli.app import main

sys.exit(main())
