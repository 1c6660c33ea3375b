# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Implements tests for collection window helpers."""

import datetime
import unittest

from o365activity.helpers import windows

UTC = datetime.timezone.utc


class WindowsTestCase(unittest.TestCase):
    """Implements tests for collection window helpers."""

    def test_recurring(self):
        """Ensures recurring windows cover the last N minutes."""
        window = windows.recurring(datetime.datetime(2023, 1, 1, 10, 0, tzinfo=UTC), 12)

        self.assertEqual(window.start_time, "2023-01-01T09:48")
        self.assertEqual(window.end_time, "2023-01-01T10:00")

    def test_recurring_truncation(self):
        """Ensures windows are truncated to the minute, and converted to UTC."""
        window = windows.recurring(
            datetime.datetime(2023, 1, 1, 10, 0, 59, 999999, tzinfo=UTC), 10
        )
        self.assertEqual(window.end, datetime.datetime(2023, 1, 1, 10, 0, tzinfo=UTC))

        offset = datetime.timezone(datetime.timedelta(hours=2))
        window = windows.recurring(
            datetime.datetime(2023, 1, 1, 12, 0, 30, tzinfo=offset), 10
        )
        self.assertEqual(window.start_time, "2023-01-01T09:50")
        self.assertEqual(window.end_time, "2023-01-01T10:00")

        # Naive datetimes are assumed to be in UTC.
        window = windows.recurring(datetime.datetime(2023, 1, 1, 10, 0, 30), 10)
        self.assertEqual(window.end, datetime.datetime(2023, 1, 1, 10, 0, tzinfo=UTC))

    def test_backfill(self):
        """Ensures backfill produces contiguous whole days, oldest first."""
        result = windows.backfill(datetime.date(2018, 11, 7), 3)

        self.assertEqual(
            [(window.start_time, window.end_time) for window in result],
            [
                ("2018-11-04T23:59", "2018-11-05T23:59"),
                ("2018-11-05T23:59", "2018-11-06T23:59"),
                ("2018-11-06T23:59", "2018-11-07T23:59"),
            ],
        )

        for previous, current in zip(result, result[1:]):
            self.assertEqual(previous.end, current.start)

    def test_backfill_single(self):
        """Ensures a single day import covers the day before the import date."""
        result = windows.backfill(datetime.date(2023, 3, 1), 1)

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].start_time, "2023-02-28T23:59")
        self.assertEqual(result[0].end_time, "2023-03-01T23:59")
