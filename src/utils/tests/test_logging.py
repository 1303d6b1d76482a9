"""Tests for structured JSON logging."""

import json
import logging
import sys
import unittest

from utils.logging import JSONFormatter, setup_structured_logging, _resolve_level


def _record(message: str, level: int = logging.INFO, extra: dict | None = None, exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.origin_guard_service",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=exc_info,
    )
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_base_fields(self):
        data = json.loads(self.formatter.format(_record("Allowed origins configured")))

        self.assertEqual(data["severity"], "INFO")
        self.assertEqual(data["logger"], "services.origin_guard_service")
        self.assertEqual(data["message"], "Allowed origins configured")
        self.assertTrue(data["timestamp"].endswith("Z"))

    def test_extra_fields_are_included(self):
        record = _record("Request finished", extra={"requestId": "abc", "status": 403})

        data = json.loads(self.formatter.format(record))

        self.assertEqual(data["requestId"], "abc")
        self.assertEqual(data["status"], 403)
        self.assertNotIn("lineno", data)

    def test_non_json_values_are_stringified(self):
        record = _record("x", extra={"origins": frozenset({"https://a.example.com"})})

        data = json.loads(self.formatter.format(record))

        self.assertIn("https://a.example.com", data["origins"])

    def test_exception_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed", level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(self.formatter.format(record))

        self.assertIn("RuntimeError: boom", data["exception"])


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        root.setLevel(self._saved[0])
        root.handlers = self._saved[1]

    def test_installs_json_handler(self):
        setup_structured_logging("warning")

        root = logging.getLogger()
        self.assertEqual(root.level, logging.WARNING)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)
        self.assertFalse(logging.getLogger("uvicorn.access").propagate)

    def test_resolve_level(self):
        self.assertEqual(_resolve_level("debug"), logging.DEBUG)
        self.assertEqual(_resolve_level("nonsense"), logging.INFO)
        self.assertEqual(_resolve_level(""), logging.INFO)


if __name__ == '__main__':
    unittest.main()
