# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Local cron trigger handler."""

import datetime
import threading

from croniter import CroniterBadCronError, croniter

from o365activity.exceptions import ConfigurationException
from o365activity.triggers import BaseTrigger


class Handler(BaseTrigger):
    """A trigger which ticks according to a cron expression (e.g. '*/10 * * * *').

    Ticks are run in the calling thread. The next tick is calculated from the time the
    previous tick completed, so ticks which are missed while a collection is still
    running are skipped rather than queued.
    """

    def __init__(self, schedule: str):
        super().__init__(schedule)

        try:
            croniter(schedule)
        except (CroniterBadCronError, ValueError) as err:
            raise ConfigurationException(
                f"Schedule '{schedule}' is not a valid cron expression. {err}"
            )

        self._stopped = threading.Event()

    def next_tick(self, now: datetime.datetime) -> datetime.datetime:
        """Calculates the time of the next tick after the given time.

        :param now: The time to calculate the next tick from.

        :return: The time of the next tick.
        """
        return croniter(self.schedule, now).get_next(datetime.datetime)

    def _wait(self, seconds: float) -> bool:
        """Waits for the given number of seconds, or until stopped.

        :return: Whether the trigger was stopped while waiting.
        """
        return self._stopped.wait(timeout=seconds)

    def run(self):
        """Blocks, ticking on schedule, until stopped."""
        self.logger.info("Starting cron trigger.", extra={"schedule": self.schedule})

        while not self._stopped.is_set():
            now = datetime.datetime.now(datetime.timezone.utc)
            due = self.next_tick(now)

            if self._wait(max((due - now).total_seconds(), 0)):
                break

            self.tick()

        self.logger.info("Cron trigger has stopped.", extra={"schedule": self.schedule})

    def stop(self):
        """Requests that the trigger stops after any in progress tick."""
        self._stopped.set()
