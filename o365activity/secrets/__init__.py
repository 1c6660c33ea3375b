# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides secret storage using supported backends.

Collector configuration documents reference secrets, such as the certificate
passphrase, by identifier rather than embedding them. For example, the following will
load the passphrase from the secret 'o365/passphrase' in the configured backend:

    "secrets": {"passphrase": "o365/passphrase"}
"""

import abc
import logging
from typing import Dict, List

from pydantic import ValidationError

from o365activity.exceptions import AccessException, ConfigurationException
from o365activity.models import CollectorConfig


class BaseSecret(abc.ABC):
    def __init__(self):
        """Provides the basis for all secret backends."""
        self.logger = logging.getLogger(__name__)

    @abc.abstractmethod
    def get(self, path: str) -> str:
        """Gets the secret with the given identifier from the given backend.

        :param path: The path to the secret to get.

        :return: The plain-text secret.
        """
        pass

    def resolve(self, configuration: CollectorConfig) -> Dict[str, str]:
        """Gets every secret referenced by a configuration document.

        :param configuration: The configuration document to resolve secrets for.

        :raises ConfigurationException: A secret is referenced for an unknown field.
        :raises AccessException: A secret could not be read from the backend.

        :return: A dictionary of field names to plain-text secrets.
        """
        resolved = {}

        for field, identifier in configuration.secrets.items():
            if field not in CollectorConfig.model_fields:
                raise ConfigurationException(
                    f"Secret '{identifier}' is configured for unknown field '{field}'."
                )

            self.logger.debug(
                "Attempting to get secret from backend",
                extra={"field": field, "collector": configuration.name},
            )
            resolved[field] = self.get(identifier)

        return resolved

    def load(self, configurations: List[CollectorConfig]) -> List[CollectorConfig]:
        """Returns copies of configuration documents with their secrets included.

        Documents are validated again once secrets are included, as a secret may be
        used for a field which is not a string. Documents for which a secret cannot
        be retrieved, or which are no longer valid, are skipped.

        :param configurations: A list of CollectorConfig objects from the
            configuration backend.

        :return: A list of CollectorConfig objects with secrets included.
        """
        ready = []

        for configuration in configurations:
            try:
                resolved = self.resolve(configuration)
                candidate = CollectorConfig.model_validate(
                    {**configuration.model_dump(), **resolved}
                )
            except (AccessException, ConfigurationException, ValidationError) as err:
                self.logger.error(
                    "Unable to get secrets for collector, skipping",
                    extra={"collector": configuration.name, "exception": err},
                )
                continue

            ready.append(candidate)

        return ready
