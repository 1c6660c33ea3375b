# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Implements tests for the local process entrypoint."""

import os
import unittest
from unittest.mock import patch

from o365activity.__about__ import __version__
from o365activity.entrypoints import local_process


class LocalProcessTestCase(unittest.TestCase):
    """Implements tests for the local process entrypoint."""

    def test_runtime_information(self):
        """Ensures the current process is described in the runtime context."""
        context = local_process.runtime_information()

        self.assertEqual(context["runtime_id"], str(os.getpid()))
        self.assertEqual(context["version"], __version__)
        self.assertIn("runtime_host", context)
        self.assertIn("runtime_python", context)

    def test_entrypoint(self):
        """Ensures the runtime context is passed through to the base entrypoint."""
        with patch.object(local_process.base, "entrypoint") as entrypoint:
            local_process.entrypoint()

        context = entrypoint.call_args.kwargs["context"]
        self.assertTrue(context["runtime"].endswith("local_process.py"))
        self.assertEqual(context["runtime_id"], str(os.getpid()))
