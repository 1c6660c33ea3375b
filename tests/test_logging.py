# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Implements tests for the structured log formatter."""

import json
import logging
import unittest

from o365activity.exceptions import RequestFailedException
from o365activity.logging import O365ActivityFormatter


class FormatterTestCase(unittest.TestCase):
    """Implements tests for the structured log formatter."""

    def setUp(self):
        self.formatter = O365ActivityFormatter(
            context={"runtime": "test_harness", "runtime_id": "NA"}
        )

    def record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="o365activity.collector",
            level=logging.INFO,
            pathname="/o365activity/collector.py",
            lineno=42,
            msg="Collection complete.",
            args=None,
            exc_info=None,
            func="collect",
        )
        record.__dict__.update(extra)

        return record

    def test_format(self):
        """Ensures log messages are rendered as JSON, with context and detail."""
        candidate = json.loads(
            self.formatter.format(self.record(records=5, collector="test"))
        )

        self.assertEqual(candidate["message"], "Collection complete.")
        self.assertEqual(candidate["level"], "INFO")
        self.assertEqual(candidate["function"], "collect")
        self.assertEqual(candidate["location"], "/o365activity/collector.py:42")
        self.assertEqual(
            candidate["context"], {"runtime": "test_harness", "runtime_id": "NA"}
        )
        self.assertEqual(candidate["detail"]["records"], 5)
        self.assertEqual(candidate["detail"]["collector"], "test")

        # Standard log record attributes must not be duplicated into the detail.
        self.assertNotIn("lineno", candidate["detail"])
        self.assertNotIn("funcName", candidate["detail"])

    def test_format_exception(self):
        """Ensures exceptions provided as extra data are rendered as strings."""
        candidate = json.loads(
            self.formatter.format(
                self.record(exception=RequestFailedException("Connection reset"))
            )
        )

        self.assertEqual(candidate["detail"]["exception"], "Connection reset")
