# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Standard output handler."""

import datetime
import json
from typing import Any, Dict

from o365activity.constants import DATESTAMP_FORMAT
from o365activity.outputs import BaseOutput


class Handler(BaseOutput):
    def submit(self, record: Dict[str, Any], collector: str, content_type: str):
        """Print a collected record to stdout, wrapped in an envelope.

        :param record: The audit record to write.
        :param collector: Name of the collector which retrieved the record.
        :param content_type: The content type the record was collected from.
        """
        datestamp = datetime.datetime.now(datetime.timezone.utc)

        print(
            json.dumps(
                {
                    "collector": collector,
                    "content_type": content_type,
                    "datestamp": datestamp.strftime(DATESTAMP_FORMAT),
                    "message": json.loads(self.serialize(record)),
                }
            ),
            flush=True,
        )
