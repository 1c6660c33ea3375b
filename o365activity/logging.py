# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides a consistent structured logger for o365activity."""

import json
import logging
from typing import Any, Dict

from aws_lambda_powertools.logging.formatter import (
    RESERVED_LOG_ATTRS,
    LambdaPowertoolsFormatter,
)


class O365ActivityFormatter(LambdaPowertoolsFormatter):
    """A logging formatter which emits logs as structured JSON documents.

    Runtime context provided at creation is added to each emitted message, alongside
    any "extra" data provided during logging calls (under "detail"). The location and
    function name of the logging call are also added to each message.
    """

    def __init__(self, context: Dict[str, str], *args, **kwargs):
        self.utc = True
        self.context = context

        super().__init__(*args, **kwargs)

        self.reserved_attrs = (*RESERVED_LOG_ATTRS, "function")

        self.log_format["location"] = "%(pathname)s:%(lineno)d"
        self.log_format["function"] = "%(funcName)s"

    def extract_keys(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Extracts and formats log records into dictionaries ready for serialisation.

        :param record: A log record to process.

        :return: A dictionary of log data to be serialized and output.
        """
        extras = {}
        structured = record.__dict__.copy()
        structured["asctime"] = self.formatTime(record=record)

        # Anything which isn't a standard log record attribute was provided by the
        # caller via "extra".
        for key, value in structured.items():
            if key not in self.reserved_attrs:
                extras[key] = value

        formatted = {}

        for key, value in self.log_format.items():
            if isinstance(value, str) and "%(" in value:
                formatted[key] = value % structured
            else:
                formatted[key] = value

        formatted.update({"detail": extras})

        return formatted

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        """Return the log message including any context provided by the entrypoint.

        :param record: A log record to process.

        :return: A stringified JSON document rendered from the log record.
        """
        structured = {}

        candidate = self.extract_keys(record=record)
        candidate["message"] = str(record.msg)
        candidate["context"] = self.context

        # Drop empty fields.
        for key, value in candidate.items():
            if value is not None:
                structured[key] = value

        return json.dumps(structured, default=str)
