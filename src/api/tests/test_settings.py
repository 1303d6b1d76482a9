"""Tests for load_settings() environment parsing."""

import os
import unittest
from unittest.mock import patch

from api.settings import DEFAULT_ALLOWED_ORIGIN, Settings, load_settings


class TestLoadSettings(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        self.assertEqual(load_settings(), Settings())

    @patch.dict(os.environ, {
        "ALLOWED_ORIGIN": " https://a.example.com, https://b.example.com ",
        "DEFAULT_ALLOWED_ORIGIN": "https://site.example",
        "GITHUB_REPO": "acme/roadmap",
        "LOG_LEVEL": "debug",
        "PORT": "9000",
    }, clear=True)
    def test_reads_environment(self):
        settings = load_settings()

        self.assertEqual(settings.allowed_origin, "https://a.example.com, https://b.example.com")
        self.assertEqual(settings.default_allowed_origin, "https://site.example")
        self.assertEqual(settings.github_repo, "acme/roadmap")
        self.assertEqual(settings.log_level, "debug")
        self.assertEqual(settings.port, 9000)

    @patch.dict(os.environ, {"DEFAULT_ALLOWED_ORIGIN": "   "}, clear=True)
    def test_blank_default_origin_uses_public_site(self):
        self.assertEqual(load_settings().default_allowed_origin, DEFAULT_ALLOWED_ORIGIN)

    @patch.dict(os.environ, {"PORT": "eighty"}, clear=True)
    def test_invalid_port_raises(self):
        with self.assertRaises(ValueError):
            load_settings()

    def test_settings_are_frozen(self):
        with self.assertRaises(AttributeError):
            Settings().allowed_origin = "*"  # type: ignore[misc]


if __name__ == '__main__':
    unittest.main()
