# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides periodic triggers, used to run recurring collections."""

import abc
import logging
from typing import Callable, List


class BaseTrigger(abc.ABC):
    """The basis for all trigger handlers.

    Collectors register a callback with a trigger, which the trigger then calls on
    every tick. Triggers must not call a callback again until the previous call has
    returned, as a collector assumes only one collection is in progress at a time.
    """

    def __init__(self, schedule: str):
        """Setup a new trigger.

        :param schedule: The schedule to tick on, in a handler specific format.
        """
        self.logger = logging.getLogger(__name__)
        self.schedule = schedule
        self._callbacks: List[Callable[[], None]] = []

    def on_tick(self, callback: Callable[[], None]):
        """Registers a callback to be called on every tick.

        :param callback: A callable which takes no arguments.
        """
        self._callbacks.append(callback)

    def tick(self):
        """Calls all registered callbacks, in the order they were registered."""
        for callback in self._callbacks:
            callback()

    @abc.abstractmethod
    def run(self):
        """Blocks, ticking on schedule, until stopped."""
        pass

    @abc.abstractmethod
    def stop(self):
        """Requests that a running trigger stops after any in progress tick."""
        pass
