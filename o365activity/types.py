# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Custom types used throughout o365activity."""

from collections.abc import MutableMapping
from datetime import datetime
from typing import Any, List, NamedTuple, Optional

from o365activity.constants import WINDOW_FORMAT


class HTTPResponse(NamedTuple):
    """Provides both the headers and the body of an HTTP response."""

    headers: MutableMapping  # type: ignore
    body: Any


class TimeWindow(NamedTuple):
    """A half-open window of time, [start, end), at minute granularity in UTC."""

    start: datetime
    end: datetime

    @property
    def start_time(self) -> str:
        """Return the start of the window, formatted for the content listing API."""
        return self.start.strftime(WINDOW_FORMAT)

    @property
    def end_time(self) -> str:
        """Return the end of the window, formatted for the content listing API."""
        return self.end.strftime(WINDOW_FORMAT)


class ContentPointer(NamedTuple):
    """A reference to a single blob of audit records available for download."""

    content_type: str
    uri: str
    created: Optional[str] = None
    content_id: Optional[str] = None


class ContentPage(NamedTuple):
    """Provides both a pagination cursor and content pointers from an API response."""

    cursor: Optional[str]
    entries: List[ContentPointer]
