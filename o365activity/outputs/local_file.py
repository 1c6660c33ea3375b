# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Local file path output handler."""

import datetime
import os
import threading
from typing import Any, Dict

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from o365activity.exceptions import AccessException
from o365activity.outputs import BaseOutput

OBJECT_PATH = "{collector}/{content_type}/{year}/{month}/{day}.ndjson"


class Handler(BaseOutput):
    class Configuration(BaseOutput.Configuration):
        """Defines environment variables used to configure the local file handler.

        As an example the field `path` would be set using the environment variable
        `O365ACTIVITY_OUTPUT_LOCAL_FILE_PATH`.
        """

        model_config = SettingsConfigDict(
            env_prefix="O365ACTIVITY_OUTPUT_LOCAL_FILE_",
            extra="ignore",
            case_sensitive=False,
        )

        path: str = Field(
            description="The path to the directory to write collected records to.",
        )

    def setup(self):
        """Checks that the configured output directory exists and is writable.

        :raises AccessException: There was an issue accessing the provided file path.
        """
        self._lock = threading.Lock()

        # Bail before we collect any data if this is a simple permissions related
        # misconfiguration.
        if not os.path.isdir(self.config.path):
            raise AccessException(
                f"Configured output path '{self.config.path}' does not exist."
            )

        if not os.access(self.config.path, os.W_OK | os.X_OK):
            raise AccessException(
                f"Configured output path '{self.config.path}' is not writable."
            )

    def submit(self, record: Dict[str, Any], collector: str, content_type: str):
        """Appends a collected record to an NDJSON file, one file per day.

        :param record: The audit record to write.
        :param collector: Name of the collector which retrieved the record.
        :param content_type: The content type the record was collected from.

        :raises AccessException: An issue occurred when writing data.
        """
        datestamp = datetime.datetime.now(datetime.timezone.utc)
        filename = OBJECT_PATH.format(
            collector=collector,
            content_type=content_type,
            year=datestamp.strftime("%Y"),
            month=datestamp.strftime("%m"),
            day=datestamp.strftime("%d"),
        )

        # Quick and dirty directory traversal check.
        root = os.path.abspath(self.config.path)
        destination = os.path.abspath(os.path.join(root, filename))

        if not destination.startswith(root + os.sep):
            raise AccessException(
                f"Generated output filepath '{destination}' is outside of the "
                f"configured output directory '{root}'."
            )

        data = self.serialize(record)

        try:
            with self._lock:
                os.makedirs(os.path.dirname(destination), exist_ok=True)

                with open(destination, "ab") as fout:
                    fout.write(data + b"\n")
        except OSError as err:
            raise AccessException(f"Unable to write record to file: {err}")
