# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Management Activity API content discovery."""

import logging
from typing import Dict, Iterator, List, Optional

from o365activity.api import Client
from o365activity.exceptions import DataFormatException, RequestFailedException
from o365activity.types import ContentPointer, TimeWindow


class ContentDiscovery:
    def __init__(self, client: Client, log_context: Optional[Dict[str, str]] = None):
        """Setup a new content discovery handler.

        :param client: The API client to use.
        :param log_context: Contextual data to add to all log messages.
        """
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.log_context = log_context or {}

    def pages(
        self,
        window: TimeWindow,
        content_type: str,
    ) -> Iterator[List[ContentPointer]]:
        """Yields pages of content pointers available within the given window.

        Paging continues for as long as the API returns a next page URI. If a request
        fails the error is logged and paging stops, so pages which have already been
        yielded are still processed by the caller.

        :param window: The window to discover content within.
        :param content_type: The content type to discover content for.

        :return: An iterator of content pointer pages, in the order returned.
        """
        context = {
            "content_type": content_type,
            "start": window.start_time,
            "end": window.end_time,
            **self.log_context,
        }
        cursor = None

        while True:
            try:
                page = self.client.list_content(
                    content_type, window=window, cursor=cursor
                )
            except (RequestFailedException, DataFormatException) as err:
                self.logger.error(
                    "Failed to list content, stopping discovery for this window.",
                    extra={"exception": err, "cursor": cursor, **context},
                )
                return

            self.logger.debug(
                "Got content page from the API.",
                extra={"count": len(page.entries), "cursor": cursor, **context},
            )
            yield page.entries

            cursor = page.cursor
            if not cursor:
                break

    def list_content(
        self,
        window: TimeWindow,
        content_type: str,
    ) -> List[ContentPointer]:
        """Lists all content pointers available within the given window.

        :param window: The window to discover content within.
        :param content_type: The content type to discover content for.

        :return: All discovered pointers, in page order. This may be a partial list if
            a request failed part way through paging.
        """
        pointers: List[ContentPointer] = []

        for page in self.pages(window, content_type):
            pointers.extend(page)

        return pointers
