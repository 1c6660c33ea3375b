# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides collected audit records to supported destinations."""

import abc
import json
import logging
from typing import Any, Dict

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from o365activity.exceptions import ConfigurationException, DataFormatException
from o365activity.helpers import parsing


class BaseOutput(abc.ABC):
    """The basis for all output handlers.

    Records are submitted to output handlers one at a time, in the order they were
    collected. Records are never modified by an output handler, as consumers rely on
    fields such as the record 'Id' for deduplication.
    """

    class Configuration(BaseSettings):
        """Defines the configuration directives required by all output handlers."""

        model_config = SettingsConfigDict(extra="ignore", case_sensitive=False)

    def __init__(self):
        """Implements core logic which applies to all handlers.

        This includes configuration of logging, and parsing of configuration.
        """
        self.logger = logging.getLogger(__name__)

        # Wrap validation errors to keep them in the o365activity exception hierarchy.
        try:
            self.config = self.Configuration()
        except ValidationError as err:
            raise ConfigurationException(
                parsing.validation_error(
                    err, self.Configuration.model_config.get("env_prefix", "")
                )
            )

    def setup(self):
        """Implements logic to setup any required clients, sockets, or connections.

        If not required for the given output handler, this may be a no-op.
        """
        pass

    @abc.abstractmethod
    def submit(self, record: Dict[str, Any], collector: str, content_type: str):
        """Implements logic required to write a collected record to the given backend.

        :param record: The audit record to write.
        :param collector: Name of the collector which retrieved the record.
        :param content_type: The content type the record was collected from.
        """
        pass

    def serialize(self, record: Any) -> bytes:
        """Serializes a single record to compact JSON.

        :param record: The record to serialize.

        :raises DataFormatException: Cannot serialize the input to JSON.

        :return: The serialized record.
        """
        try:
            return bytes(json.dumps(record, separators=(",", ":")), "utf-8")
        except (TypeError, ValueError) as err:
            raise DataFormatException(f"Unable to serialize to JSON: {err}")
