# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Implements tests for the standard output handler."""

import contextlib
import io
import json
import unittest

from o365activity.outputs.local_stdout import Handler


class LocalStdoutTestCase(unittest.TestCase):
    """Implements tests for the standard output handler."""

    def test_submit(self):
        """Ensures records are printed in an envelope, one per line."""
        handler = Handler()
        handler.setup()

        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            handler.submit({"Id": "0001"}, collector="test", content_type="DLP.All")
            handler.submit({"Id": "0002"}, collector="test", content_type="DLP.All")

        lines = [json.loads(line) for line in stdout.getvalue().splitlines()]

        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0]["collector"], "test")
        self.assertEqual(lines[0]["content_type"], "DLP.All")
        self.assertEqual(lines[0]["message"], {"Id": "0001"})
        self.assertEqual(lines[1]["message"], {"Id": "0002"})
        self.assertIn("datestamp", lines[0])
