# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Management Activity API collector.

A collector is responsible for collecting a single content type for a single tenant.
Content is collected by discovering the content blobs available in a window of time,
downloading each blob, and submitting every record in it to the configured output
handler.

No state is kept between collections. Windows for recurring collections should
overlap, as content may be published some time after the events it contains. This
results in some records being output more than once, so consumers should deduplicate
records using their 'Id' field.
"""

import datetime
import logging
import os
from typing import Any, Dict, Iterator, Optional

from o365activity.api import Client
from o365activity.auth import TokenManager
from o365activity.constants import (
    CONTENT_RETENTION_DAYS,
    DEFAULT_OUTPUT_HANDLER,
    DEFAULT_TRIGGER_HANDLER,
    ENV_OUTPUT_HANDLER,
    ENV_TRIGGER_HANDLER,
    PLUGIN_GROUP_OUTPUT,
    PLUGIN_GROUP_TRIGGER,
)
from o365activity.discovery import ContentDiscovery
from o365activity.exceptions import O365ActivityException
from o365activity.fetcher import BlobFetcher
from o365activity.helpers import plugin, windows
from o365activity.models import CollectorConfig, RunMode
from o365activity.subscriptions import SubscriptionManager
from o365activity.types import TimeWindow


class Collector:
    def __init__(self, config: CollectorConfig, context: Dict[str, str]):
        """Sets up a collector.

        :param config: A valid CollectorConfig object containing information to use
            when configuring this collector.
        :param context: Contextual information relating to the current runtime.

        :raises ConfigurationException: The configured certificate, or a handler,
            could not be loaded.
        """
        self.logger = logging.getLogger(__name__)
        self.configuration = config
        self.runtime_context = context

        self.name = config.name
        self.content_type = config.content_type.value

        # Define contextual log data to be appended to all log messages.
        self.log_context = {
            "collector": self.name,
            "content_type": self.content_type,
            "tenant_id": config.tenant_id,
        }

        self.tokens = TokenManager(config)
        self.client = Client(
            tenant_id=config.tenant_id,
            publisher_id=config.publisher_id or config.tenant_id,
            tokens=self.tokens,
            host=config.api_host,
            timeout=config.timeout,
        )
        self.subscriptions = SubscriptionManager(self.client, self.log_context)
        self.discovery = ContentDiscovery(self.client, self.log_context)
        self.fetcher = BlobFetcher(self.client, config.workers, self.log_context)

        # Let the caller handle exceptions from failure to load handlers directly.
        self._output = plugin.load_handler(
            os.environ.get(ENV_OUTPUT_HANDLER, DEFAULT_OUTPUT_HANDLER),
            PLUGIN_GROUP_OUTPUT,
        )
        self._output.setup()

        # The trigger is only loaded when running in recurring mode.
        self._trigger = None

        # Track the number of records output, for statistics.
        self._saved = 0

    def run(self):
        """Collector entrypoint, called by the entrypoint.

        The subscription is activated once, before content is collected in the run
        mode selected by the configuration. In recurring mode this blocks until the
        trigger is stopped.
        """
        self.activate()

        mode = self.configuration.mode
        self.logger.info(
            f"Collector starting in {mode.value} mode.",
            extra={"mode": mode.value, **self.log_context},
        )

        if mode == RunMode.recurring:
            self._trigger = plugin.load_handler(
                os.environ.get(ENV_TRIGGER_HANDLER, DEFAULT_TRIGGER_HANDLER),
                PLUGIN_GROUP_TRIGGER,
                self.configuration.schedule,
            )
            self._trigger.on_tick(self.tick)
            self._trigger.run()
            return

        if mode == RunMode.backfill:
            self.backfill()
            return

        self.tick()

    def stop(self):
        """Stops a running recurring collector after any in progress collection."""
        if self._trigger is not None:
            self._trigger.stop()

    def activate(self) -> bool:
        """Ensures a subscription to the configured content type exists.

        A failure to start the subscription is logged, but collection continues.

        :return: Whether the subscription is active.
        """
        subscribed = self.subscriptions.is_subscribed(self.content_type)
        self.logger.info(
            "Checked subscription status.",
            extra={"subscribed": subscribed, **self.log_context},
        )
        if subscribed:
            return True

        self.logger.info("Not subscribed, subscribing.", extra=self.log_context)
        started = self.subscriptions.start(self.content_type)

        if not started:
            self.logger.warning(
                "Unable to subscribe, collection may not return content.",
                extra=self.log_context,
            )

        return started

    def tick(self, now: Optional[datetime.datetime] = None):
        """Performs a single recurring collection, for the last N minutes.

        Errors are logged rather than raised, to allow collection to be attempted
        again on the next tick.

        :param now: The time to calculate the window from, defaults to the current time.
        """
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)

        window = windows.recurring(now, self.configuration.timerange)

        try:
            self.collect(window)
        except O365ActivityException as err:
            self.logger.error(
                f"Collector '{self.name}' could not complete collection successfully.",
                extra={
                    "exception": err,
                    "start": window.start_time,
                    "end": window.end_time,
                    **self.log_context,
                },
            )

    def backfill(self):
        """Performs a one-time import of whole days, oldest day first.

        Days are collected one at a time, with all records for a day output before the
        next day is started.

        :raises O365ActivityException: Records could not be output.
        """
        import_date = self.configuration.import_date
        if import_date is None:
            return

        retention = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(
            days=CONTENT_RETENTION_DAYS
        )

        for window in windows.backfill(import_date, self.configuration.days_to_import):
            if window.start < retention:
                self.logger.warning(
                    "Window is outside of content retention, content may be missing.",
                    extra={
                        "start": window.start_time,
                        "end": window.end_time,
                        **self.log_context,
                    },
                )

            self.collect(window)

    def records(self, window: TimeWindow) -> Iterator[Dict[str, Any]]:
        """Yields every record available within the given window.

        Content is discovered and fetched one page at a time. All blobs in a page are
        downloaded before the next page of content is requested.

        :param window: The window to collect records for.

        :return: An iterator of records, in the order they were collected.
        """
        for page in self.discovery.pages(window, self.content_type):
            yield from self.fetcher.fetch_all(page)

    def collect(self, window: TimeWindow) -> int:
        """Collects all records within the given window, submitting them to the output.

        :param window: The window to collect records for.

        :raises O365ActivityException: Records could not be output.

        :return: The number of records output.
        """
        count = 0

        for record in self.records(window):
            self._output.submit(
                record,
                collector=self.name,
                content_type=self.content_type,
            )
            count += 1

        self._saved += count
        self.logger.info(
            "Collection complete.",
            extra={
                "records": count,
                "start": window.start_time,
                "end": window.end_time,
                **self.log_context,
            },
        )

        return count
