# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides helpers for handler plugin loading."""

from importlib.metadata import EntryPoint, entry_points
from typing import Any

from o365activity.exceptions import ConfigurationException


def lookup_handler(name: str, group: str) -> EntryPoint:
    """Attempts to locate the requested plugin handler.

    Handlers register themselves using setuptools entrypoints, which allows outputs,
    triggers, configuration and secret backends to be provided by other packages.

    :param name: The name of the handler to load (e.g. 'local_cron').
    :param group: The group the handler belongs to (e.g. 'o365activity.triggers').

    :raises ConfigurationException: The specified handler could not be located.
    """
    for candidate in entry_points(group=group):
        if candidate.name == name:
            return candidate

    raise ConfigurationException(
        f"Requested handler could not be found with name '{name}' (group '{group}')"
    )


def load_handler(name: str, group: str, *args: Any, **kwargs: Any) -> Any:
    """Attempts to locate, load, and instantiate the requested plugin handler.

    Any additional arguments are passed through to the handler during creation.

    :param name: The name of the handler to load (e.g. 'local_stdout').
    :param group: The group the handler belongs to (e.g. 'o365activity.outputs').
    """
    cls = lookup_handler(name, group).load()

    return cls(*args, **kwargs)
