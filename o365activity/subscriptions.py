# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Management Activity API subscription management."""

import logging
from typing import Dict, Optional

from o365activity.api import Client
from o365activity.exceptions import DataFormatException, RequestFailedException


class SubscriptionManager:
    def __init__(self, client: Client, log_context: Optional[Dict[str, str]] = None):
        """Setup a new subscription manager.

        Failures are never raised to the caller, they are logged and reported as a
        False return value.

        :param client: The API client to use.
        :param log_context: Contextual data to add to all log messages.
        """
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.log_context = log_context or {}

    def is_subscribed(self, content_type: str) -> bool:
        """Checks whether a subscription exists for the given content type.

        :param content_type: The content type to check.

        :return: Whether any subscription for the given content type was found.
        """
        context = {"content_type": content_type, **self.log_context}

        try:
            subscriptions = self.client.list_subscriptions()
        except (RequestFailedException, DataFormatException) as err:
            self.logger.error(
                "Failed to list subscriptions.",
                extra={"exception": err, **context},
            )
            return False

        self.logger.debug(
            "Got subscription list.",
            extra={"subscriptions": subscriptions, **context},
        )

        for subscription in subscriptions:
            if not isinstance(subscription, dict):
                continue

            if subscription.get("contentType") == content_type:
                self.logger.info(
                    "Found subscription for content type.",
                    extra={"status": subscription.get("status"), **context},
                )
                return True

        return False

    def start(self, content_type: str) -> bool:
        """Starts a subscription for the given content type.

        :param content_type: The content type to subscribe to.

        :return: Whether the subscription was successfully started.
        """
        context = {"content_type": content_type, **self.log_context}

        try:
            response = self.client.start_subscription(content_type)
        except RequestFailedException as err:
            self.logger.error(
                "Failed to start subscription.",
                extra={"exception": err, **context},
            )
            return False

        self.logger.info(
            "Successfully started subscription.",
            extra={"response": response.text, **context},
        )
        return True

    def stop(self, content_type: str) -> bool:
        """Stops a subscription for the given content type.

        :param content_type: The content type to unsubscribe from.

        :return: Whether the subscription was successfully stopped.
        """
        context = {"content_type": content_type, **self.log_context}

        try:
            self.client.stop_subscription(content_type)
        except RequestFailedException as err:
            self.logger.error(
                "Failed to stop subscription.",
                extra={"exception": err, **context},
            )
            return False

        self.logger.info("Successfully stopped subscription.", extra=context)
        return True
