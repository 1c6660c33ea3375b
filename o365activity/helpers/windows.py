# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides helpers for calculating collection windows."""

from datetime import date, datetime, time, timedelta, timezone
from typing import List

from o365activity.types import TimeWindow

# Backfill windows end one minute before midnight of their day.
BACKFILL_END_OF_DAY = time(hour=23, minute=59)


def truncate(value: datetime) -> datetime:
    """Truncates a datetime to minute granularity in UTC.

    Naive datetimes are assumed to already be in UTC.

    :param value: The datetime to truncate.

    :return: A timezone aware datetime with seconds and microseconds removed.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    return value.astimezone(timezone.utc).replace(second=0, microsecond=0)


def recurring(now: datetime, minutes: int) -> TimeWindow:
    """Calculates the window for a recurring collection.

    Windows are intended to overlap between collections, so that content which is
    published late is not missed.

    :param now: The current time.
    :param minutes: The length of the window, in minutes.

    :return: A window covering the last N minutes.
    """
    end = truncate(now)

    return TimeWindow(start=end - timedelta(minutes=minutes), end=end)


def backfill(import_date: date, days: int) -> List[TimeWindow]:
    """Calculates the day windows for a one-time historical import.

    Windows are returned oldest first, with the last window ending at 23:59 on the
    import date.

    :param import_date: The last day to import.
    :param days: The number of days to import, counting back from the import date.

    :return: A list of contiguous 24 hour windows.
    """
    last = datetime.combine(import_date, BACKFILL_END_OF_DAY, tzinfo=timezone.utc)
    windows = []

    for offset in range(days - 1, -1, -1):
        end = last - timedelta(days=offset)
        windows.append(TimeWindow(start=end - timedelta(days=1), end=end))

    return windows
