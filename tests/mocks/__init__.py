# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides Mock implementations for unit and integration tests."""

from typing import Any

from o365activity.constants import PLUGIN_GROUP_OUTPUT, PLUGIN_GROUP_TRIGGER
from o365activity.helpers import plugin
from tests.mocks import auth, certificates, output, trigger  # noqa: F401


def load_handler(name: str, group: str, *args, **kwargs) -> Any:
    """Wraps handler loading to load predefined mocks for a given group."""
    if group == PLUGIN_GROUP_OUTPUT:
        return output.TestHandler()

    if group == PLUGIN_GROUP_TRIGGER:
        return trigger.TestHandler(*args, **kwargs)

    cls = plugin.lookup_handler(name, group).load()
    return cls(*args, **kwargs)
