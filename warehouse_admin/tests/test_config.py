import json
import os
import tempfile
import unittest
from unittest.mock import patch

from warehouse_admin.config import DEFAULT_CONFIG, load_config, save_config
from warehouse_admin.errors import ConfigError


class LoadConfigTest(unittest.TestCase):

    def setUp(self):
        dotenv_patcher = patch("warehouse_admin.config.dotenv.load_dotenv")
        dotenv_patcher.start()
        self.addCleanup(dotenv_patcher.stop)

        env_patcher = patch.dict(os.environ, {}, clear=True)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)

        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "config.json")

    def write(self, data):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(data if isinstance(data, str) else json.dumps(data))

    def test_defaults_without_file(self):
        config = load_config(self.path)
        self.assertEqual(config["api"]["base_url"], DEFAULT_CONFIG["api"]["base_url"])
        self.assertEqual(config["ui"]["per_page"], 10)
        self.assertEqual(config["api"]["timeout"], 10.0)

    def test_file_overrides_are_merged(self):
        self.write({"api": {"base_url": "http://wh.test/api"}, "ui": {"per_page": 20}})
        config = load_config(self.path)
        self.assertEqual(config["api"]["base_url"], "http://wh.test/api")
        self.assertEqual(config["api"]["timeout"], 10.0)
        self.assertEqual(config["ui"]["per_page"], 20)
        self.assertEqual(config["ui"]["export_dir"], ".")

    def test_defaults_are_not_mutated(self):
        self.write({"ui": {"per_page": 50}})
        load_config(self.path)
        self.assertEqual(DEFAULT_CONFIG["ui"]["per_page"], 10)

    def test_environment_wins_over_file(self):
        self.write({"api": {"base_url": "http://file.test"}})
        os.environ.update({
            "WAREHOUSE_API_URL": "http://env.test",
            "WAREHOUSE_API_TIMEOUT": "2.5",
            "WAREHOUSE_PAGE_SIZE": "5",
            "WAREHOUSE_LOG_PATH": "/tmp/wa.log",
        })
        config = load_config(self.path)
        self.assertEqual(config["api"]["base_url"], "http://env.test")
        self.assertEqual(config["api"]["timeout"], 2.5)
        self.assertEqual(config["ui"]["per_page"], 5)
        self.assertEqual(config["logging"]["path"], "/tmp/wa.log")

    def test_invalid_page_size(self):
        os.environ["WAREHOUSE_PAGE_SIZE"] = "7"
        with self.assertRaises(ConfigError):
            load_config(self.path)
        os.environ["WAREHOUSE_PAGE_SIZE"] = "ten"
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_invalid_timeout(self):
        os.environ["WAREHOUSE_API_TIMEOUT"] = "-1"
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_broken_json(self):
        self.write("{not json")
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_save_round_trip(self):
        config = load_config(self.path)
        config["ui"]["per_page"] = 50
        self.assertTrue(save_config(config, self.path))
        self.assertEqual(load_config(self.path)["ui"]["per_page"], 50)


if __name__ == "__main__":
    unittest.main()
