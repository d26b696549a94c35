"""Tests for the structured JSON log formatter."""

import json
import logging
import unittest

from utils.logging import JSONFormatter, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="api.routes.user", level=logging.INFO, pathname=__file__, lineno=1,
            msg="Profile updated %s", args=("ok",), exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formats_core_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "api.routes.user")
        self.assertEqual(data["message"], "Profile updated ok")
        self.assertTrue(data["timestamp"].endswith("Z"))

    def test_includes_extra_fields(self):
        data = json.loads(JSONFormatter().format(self._record(userId="u1", fields=["name"])))

        self.assertEqual(data["userId"], "u1")
        self.assertEqual(data["fields"], ["name"])
        self.assertNotIn("pathname", data)

    def test_non_json_values_are_stringified(self):
        from datetime import datetime, timezone
        stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
        data = json.loads(JSONFormatter().format(self._record(at=stamp)))
        self.assertEqual(data["at"], str(stamp))


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, root.handlers[:])

    def tearDown(self):
        root = logging.getLogger()
        root.setLevel(self._saved[0])
        root.handlers = self._saved[1]

    def test_installs_json_handler_and_quiets_libraries(self):
        setup_structured_logging("DEBUG")

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger("sqlalchemy.engine").level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
