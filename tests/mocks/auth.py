# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Mocks the token manager."""

import datetime

from o365activity.models import Credential


class StaticTokenManager:
    """A token manager which always returns the same, valid, token."""

    def __init__(self, config=None, *args, **kwargs):
        self.calls = 0
        self._credential = Credential(
            tenant_id=getattr(config, "tenant_id", "tenant"),
            publisher_id=getattr(config, "publisher_id", "tenant"),
            client_id=getattr(config, "client_id", "client"),
            certificate=bytes(),
            token="token",
            expiry=datetime.datetime.now(datetime.timezone.utc)
            + datetime.timedelta(hours=1),
        )

    @property
    def credential(self):
        return self._credential

    def ensure_fresh(self):
        self.calls += 1
        return self._credential
