# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Management Activity API content blob fetcher."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from o365activity.api import Client
from o365activity.constants import DEFAULT_FETCH_WORKERS
from o365activity.exceptions import DataFormatException, RequestFailedException
from o365activity.types import ContentPointer


class BlobFetcher:
    def __init__(
        self,
        client: Client,
        workers: int = DEFAULT_FETCH_WORKERS,
        log_context: Optional[Dict[str, str]] = None,
    ):
        """Setup a new content blob fetcher.

        :param client: The API client to use.
        :param workers: The maximum number of blobs to download concurrently.
        :param log_context: Contextual data to add to all log messages.
        """
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.workers = workers
        self.log_context = log_context or {}

    def fetch(self, pointer: ContentPointer) -> List[Dict[str, Any]]:
        """Downloads a single content blob, returning its records.

        Errors are logged and result in no records being returned for this blob.

        :param pointer: The pointer of the blob to download.

        :return: A list of audit records.
        """
        try:
            return self.client.get_blob(pointer.uri)
        except (RequestFailedException, DataFormatException) as err:
            self.logger.error(
                "Failed to retrieve content blob, skipping.",
                extra={
                    "exception": err,
                    "uri": pointer.uri,
                    "content_type": pointer.content_type,
                    **self.log_context,
                },
            )

        return []

    def fetch_all(self, pointers: List[ContentPointer]) -> List[Dict[str, Any]]:
        """Downloads a batch of content blobs concurrently, flattening their records.

        This blocks until every blob in the batch has been downloaded, or has failed.
        A failure to download one blob does not affect any other.

        :param pointers: The pointers of the blobs to download.

        :return: All records from all blobs, in the order of the provided pointers.
        """
        records: List[Dict[str, Any]] = []
        if len(pointers) < 1:
            return records

        with ThreadPoolExecutor(max_workers=min(self.workers, len(pointers))) as pool:
            futures = [pool.submit(self.fetch, pointer) for pointer in pointers]

            # Results are collected in submission order so that output is stable
            # regardless of which download finishes first.
            for future in futures:
                records.extend(future.result())

        self.logger.debug(
            "Fetched content blobs.",
            extra={
                "blobs": len(pointers),
                "records": len(records),
                **self.log_context,
            },
        )

        return records
