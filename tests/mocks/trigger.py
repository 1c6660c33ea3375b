# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Mocks a trigger handler."""

from o365activity.triggers import BaseTrigger


class TestHandler(BaseTrigger):
    __test__ = False

    # The number of times to tick before returning from run.
    TICKS = 2

    def run(self):
        """Ticks a fixed number of times, immediately."""
        self.ticks = 0

        while self.ticks < self.TICKS:
            self.tick()
            self.ticks += 1

    def stop(self):
        """Does nothing, successfully."""
