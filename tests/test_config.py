"""Tests for environment-driven settings."""

import os
import unittest
from unittest import mock

from vpkpack.core.config import Settings


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = Settings(_env_file=None)

        self.assertEqual(config.default_output_file, "output.vpk")
        self.assertEqual(config.log_level, "INFO")
        self.assertIsNone(config.source_date_epoch)

    def test_prefixed_variables(self):
        env = {
            "VPKPACK_DEFAULT_OUTPUT_FILE": "game.vpk",
            "VPKPACK_LOG_LEVEL": "DEBUG",
            "VPKPACK_COPY_CHUNK_SIZE": "4096",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = Settings(_env_file=None)

        self.assertEqual(config.default_output_file, "game.vpk")
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.copy_chunk_size, 4096)

    def test_source_date_epoch(self):
        with mock.patch.dict(os.environ, {"SOURCE_DATE_EPOCH": "1700000000"}, clear=True):
            config = Settings(_env_file=None)
        self.assertEqual(config.source_date_epoch, 1700000000)

    def test_prefixed_source_date_epoch(self):
        with mock.patch.dict(os.environ, {"VPKPACK_SOURCE_DATE_EPOCH": "42"}, clear=True):
            config = Settings(_env_file=None)
        self.assertEqual(config.source_date_epoch, 42)


if __name__ == "__main__":
    unittest.main()
