# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""A collector for the Office 365 Management Activity API."""

from o365activity import (
    constants,  # noqa: F401
    exceptions,  # noqa: F401
    helpers,  # noqa: F401
    logging,  # noqa: F401
    models,  # noqa: F401
    types,  # noqa: F401
)
from o365activity.__about__ import *  # noqa: F401, F403
