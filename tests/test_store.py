import json
import stat
import sys
import unittest
from unittest.mock import patch

from directus_auth.models import Config, Credentials

from tests._helpers import TempStoreMixin

PROD = Credentials(url="https://cms.example.com", token="prod-token")
STAGING = Credentials(url="https://staging.example.com/", token="staging-token")
DEV = Credentials(url="http://localhost:8055", token="dev-token")


class ReadWriteTests(TempStoreMixin):
    def test_missing_file_returns_empty_config(self) -> None:
        config = self.store.read_config()
        self.assertIsNone(config.active)
        self.assertEqual(config.credentials, {})
        self.assertFalse(self.store_path.exists())

    def test_invalid_json_returns_empty_config(self) -> None:
        self.store_path.parent.mkdir(parents=True)
        self.store_path.write_text("{bad json", encoding="utf-8")
        with self.assertLogs("directus_auth.store", level="WARNING"):
            config = self.store.read_config()
        self.assertEqual(config, Config())

    def test_wrong_shape_returns_empty_config(self) -> None:
        self.store_path.parent.mkdir(parents=True)
        for content in ("[]", '"text"', '{"credentials": {"a": "not-an-object"}}'):
            self.store_path.write_text(content, encoding="utf-8")
            with self.assertLogs("directus_auth.store", level="WARNING"):
                self.assertEqual(self.store.read_config(), Config())

    def test_write_and_read_round_trip(self) -> None:
        config = Config(active="prod", credentials={"prod": PROD, "staging": STAGING})
        self.store.write_config(config)
        self.assertEqual(self.store.read_config(), config)

    def test_write_creates_directory_and_json_schema(self) -> None:
        self.store.write_config(Config(active="prod", credentials={"prod": PROD}))
        raw = json.loads(self.store_path.read_text(encoding="utf-8"))
        self.assertEqual(
            raw,
            {"active": "prod", "credentials": {"prod": {"url": PROD.url, "token": PROD.token}}},
        )

    @unittest.skipIf(sys.platform.startswith("win"), "POSIX file modes only")
    def test_written_file_is_owner_only(self) -> None:
        self.store.write_config(Config())
        mode = stat.S_IMODE(self.store_path.stat().st_mode)
        self.assertEqual(mode, 0o600)

    def test_write_leaves_no_temp_files(self) -> None:
        self.store.write_config(Config(active="prod", credentials={"prod": PROD}))
        self.store.write_config(Config(active="dev", credentials={"dev": DEV}))
        self.assertEqual([p.name for p in self.store_path.parent.iterdir()], ["config.json"])

    def test_failed_write_keeps_previous_document(self) -> None:
        original = Config(active="prod", credentials={"prod": PROD})
        self.store.write_config(original)

        with patch("directus_auth.store.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                self.store.write_config(Config(active="dev", credentials={"dev": DEV}))

        self.assertEqual(self.store.read_config(), original)
        self.assertEqual([p.name for p in self.store_path.parent.iterdir()], ["config.json"])

    @unittest.skipIf(sys.platform.startswith("win"), "POSIX file modes only")
    def test_overwrite_of_world_readable_file_becomes_owner_only(self) -> None:
        self.store_path.parent.mkdir(parents=True)
        self.store_path.write_text("{}", encoding="utf-8")
        self.store_path.chmod(0o644)
        self.store.write_config(Config(active="prod", credentials={"prod": PROD}))
        self.assertEqual(stat.S_IMODE(self.store_path.stat().st_mode), 0o600)

    def test_dangling_active_is_repaired_on_read(self) -> None:
        self.store_path.parent.mkdir(parents=True)
        self.store_path.write_text(
            json.dumps({"active": "gone", "credentials": {"prod": PROD.to_dict()}}),
            encoding="utf-8",
        )
        self.assertEqual(self.store.get_active_name(), "prod")


class MutationTests(TempStoreMixin):
    def test_first_added_becomes_active(self) -> None:
        self.store.add_credentials("prod", PROD)
        self.assertEqual(self.store.get_active_name(), "prod")

    def test_second_add_keeps_active(self) -> None:
        self.store.add_credentials("prod", PROD)
        self.store.add_credentials("staging", STAGING)
        self.assertEqual(self.store.get_active_name(), "prod")

    def test_add_overwrites_existing(self) -> None:
        self.store.add_credentials("prod", PROD)
        replacement = Credentials(url="https://new.example.com", token="new")
        self.store.add_credentials("prod", replacement)
        self.assertEqual(self.store.get_credentials("prod"), replacement)
        self.assertEqual(len(self.store.get_all_credentials()), 1)

    def test_remove_unknown_returns_false_and_leaves_file_alone(self) -> None:
        self.assertFalse(self.store.remove_credentials("nope"))
        self.assertFalse(self.store_path.exists())

    def test_remove_active_promotes_remaining(self) -> None:
        self.store.add_credentials("prod", PROD)
        self.store.add_credentials("staging", STAGING)
        self.store.add_credentials("dev", DEV)

        self.assertTrue(self.store.remove_credentials("prod"))
        self.assertEqual(self.store.get_active_name(), "staging")

    def test_remove_inactive_keeps_active(self) -> None:
        self.store.add_credentials("prod", PROD)
        self.store.add_credentials("staging", STAGING)
        self.assertTrue(self.store.remove_credentials("staging"))
        self.assertEqual(self.store.get_active_name(), "prod")

    def test_remove_last_clears_active(self) -> None:
        self.store.add_credentials("prod", PROD)
        self.assertTrue(self.store.remove_credentials("prod"))
        self.assertIsNone(self.store.get_active_name())
        self.assertIsNone(self.store.get_active_credentials())

    def test_set_active_unknown_is_noop(self) -> None:
        self.store.add_credentials("prod", PROD)
        before = self.store_path.read_text(encoding="utf-8")
        self.assertFalse(self.store.set_active("nope"))
        self.assertEqual(self.store_path.read_text(encoding="utf-8"), before)

    def test_set_active_known(self) -> None:
        self.store.add_credentials("prod", PROD)
        self.store.add_credentials("staging", STAGING)
        self.assertTrue(self.store.set_active("staging"))
        active = self.store.get_active_credentials()
        assert active is not None
        self.assertEqual(active.name, "staging")
        self.assertEqual(active.credentials, STAGING)

    def test_active_invariant_holds_across_sequence(self) -> None:
        steps = [
            ("add", "a"), ("add", "b"), ("remove", "a"), ("add", "c"),
            ("remove", "missing"), ("remove", "b"), ("add", "a"), ("remove", "c"),
            ("remove", "a"), ("add", "z"),
        ]
        for op, name in steps:
            if op == "add":
                self.store.add_credentials(name, PROD)
            else:
                self.store.remove_credentials(name)
            config = self.store.read_config()
            if config.credentials:
                self.assertIn(config.active, config.credentials, f"after {op} {name}")
            else:
                self.assertIsNone(config.active, f"after {op} {name}")


class QueryTests(TempStoreMixin):
    def test_queries_on_empty_store(self) -> None:
        self.assertEqual(self.store.get_all_credentials(), {})
        self.assertIsNone(self.store.get_credentials("prod"))
        self.assertFalse(self.store.has_credentials("prod"))
        self.assertIsNone(self.store.get_active_name())
        self.assertIsNone(self.store.get_active_credentials())

    def test_each_call_rereads_the_file(self) -> None:
        self.store.add_credentials("prod", PROD)
        self.store_path.write_text(
            json.dumps({"active": None, "credentials": {}}), encoding="utf-8"
        )
        self.assertFalse(self.store.has_credentials("prod"))


if __name__ == "__main__":
    unittest.main()
