import tempfile
import unittest
from pathlib import Path

from directus_auth.store import CredentialStore


class TempStoreMixin(unittest.TestCase):
    """Gives each test a CredentialStore inside its own temporary directory."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp_dir = Path(tmp.name)
        self.store_path = self.tmp_dir / "nested" / "config.json"
        self.store = CredentialStore(self.store_path)
