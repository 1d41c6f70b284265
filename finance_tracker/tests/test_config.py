import json
import os
import tempfile
import unittest
from unittest.mock import patch

from ..config import DEFAULT_CONFIG, load_config, save_config, validate_config
from ..errors import ConfigError


@patch("finance_tracker.config.load_dotenv")
class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "config.json")
        self.env = patch.dict(os.environ, {}, clear=True)
        self.env.start()

    def tearDown(self):
        self.env.stop()
        self.tmp.cleanup()

    def write(self, data):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def test_defaults_when_no_file(self, _dotenv):
        config = load_config(self.path)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertIsNot(config["ui"], DEFAULT_CONFIG["ui"])

    def test_file_values_merge_over_defaults(self, _dotenv):
        self.write({"ui": {"per_page": 20, "currency_symbol": "$"}})
        config = load_config(self.path)
        self.assertEqual(config["ui"]["per_page"], 20)
        self.assertEqual(config["ui"]["currency_symbol"], "$")
        self.assertEqual(config["ui"]["page_size_options"], [10, 20, 50, 100])
        self.assertEqual(config["sqlite"]["db_path"], "data/finance_tracker.db")

    def test_broken_file_is_ignored(self, _dotenv):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertEqual(load_config(self.path)["ui"]["per_page"], 10)

    def test_environment_overrides_file(self, _dotenv):
        self.write({"sqlite": {"db_path": "from_file.db"}})
        os.environ["FINANCE_TRACKER_DB"] = "from_env.db"
        os.environ["FINANCE_TRACKER_LOG_LEVEL"] = "DEBUG"
        os.environ["FINANCE_TRACKER_PAGE_SIZE"] = "50"

        config = load_config(self.path)

        self.assertEqual(config["sqlite"]["db_path"], "from_env.db")
        self.assertEqual(config["logging"]["level"], "DEBUG")
        self.assertEqual(config["ui"]["per_page"], 50)
        _dotenv.assert_called_once()

    def test_non_integer_page_size_env(self, _dotenv):
        os.environ["FINANCE_TRACKER_PAGE_SIZE"] = "lots"
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_page_size_must_be_an_option(self, _dotenv):
        self.write({"ui": {"per_page": 15}})
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_save_then_load(self, _dotenv):
        config = load_config(self.path)
        config["ui"]["date_format"] = "%Y-%m-%d"
        self.assertTrue(save_config(config, self.path))
        self.assertEqual(load_config(self.path)["ui"]["date_format"], "%Y-%m-%d")


class TestValidateConfig(unittest.TestCase):
    def test_rejects_bad_options(self):
        for options in ([], [10, 0], [10, "20"]):
            with self.subTest(options=options):
                with self.assertRaises(ConfigError):
                    validate_config({"sqlite": {"db_path": "x.db"}, "ui": {"per_page": 10, "page_size_options": options}})

    def test_requires_db_path(self):
        with self.assertRaises(ConfigError):
            validate_config({"sqlite": {}, "ui": {"per_page": 10, "page_size_options": [10]}})


if __name__ == "__main__":
    unittest.main()
