# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Data models used throughout o365activity."""

import datetime
from enum import Enum
from typing import Dict, Optional

from croniter import croniter
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from o365activity.constants import (
    API_HOST,
    DEFAULT_DAYS_TO_IMPORT,
    DEFAULT_FETCH_WORKERS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TIMERANGE,
)


class ContentType(str, Enum):
    """Defines the content types which can be subscribed to."""

    azure_active_directory = "Audit.AzureActiveDirectory"
    exchange = "Audit.Exchange"
    sharepoint = "Audit.SharePoint"
    general = "Audit.General"
    dlp = "DLP.All"


class RunMode(str, Enum):
    """Defines how a collector is run, as determined by its configuration."""

    recurring = "recurring"
    backfill = "backfill"
    single = "single"


class CollectorConfig(BaseModel):
    """Defines the collector configuration structure.

    A configuration object represents everything required to collect a single content
    type for a single tenant. Multiple content types are collected by providing
    multiple configuration documents.

    Exactly one run mode is selected from the configuration. If a schedule is set the
    collector runs forever, collecting the last N minutes of content on every tick of
    the schedule. Otherwise, if an import date is set, a one-time import of whole days
    is performed. If neither is set, a single collection is performed and the
    collector exits.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    client_id: str
    tenant_id: str

    # The tenant domain (e.g. contoso.onmicrosoft.com) may be used when requesting
    # tokens, if set. Otherwise the tenant identifier is used.
    tenant: Optional[str] = None

    # The publisher identifier is sent with every request and is used to attribute
    # quota. It defaults to the tenant identifier.
    publisher_id: Optional[str] = None

    # A PKCS#12 (PFX) file containing the certificate and private key registered
    # against the application, and its passphrase.
    certificate_path: str
    passphrase: str = Field(str(), repr=False)

    content_type: ContentType

    # The last N minutes of content to collect on each run. This should be longer
    # than the schedule interval, as content is published with some delay.
    timerange: int = Field(DEFAULT_TIMERANGE, gt=0)

    # Schedule of when to collect, in cron format (e.g. "*/10 * * * *").
    schedule: Optional[str] = None

    # Used for a one-time import of whole days, ignored if a schedule is set.
    import_date: Optional[datetime.date] = None
    days_to_import: int = Field(DEFAULT_DAYS_TO_IMPORT, ge=1)

    # The number of content blobs to download concurrently.
    workers: int = Field(DEFAULT_FETCH_WORKERS, ge=1)

    # Timeout, in seconds, applied to every HTTP request.
    timeout: int = Field(DEFAULT_REQUEST_TIMEOUT, gt=0)

    # Allows use of the API from sovereign clouds.
    api_host: str = Field(API_HOST)

    # Allow the collector to be disabled via configuration flag.
    disabled: bool = Field(False)

    # Secrets is used to mark which fields are considered to be secrets, and their
    # associated location in the configured secrets backend.
    secrets: Dict[str, str] = Field({})

    @field_validator("schedule")
    @classmethod
    def _validate_schedule(cls, value: Optional[str]) -> Optional[str]:
        """Ensures that the schedule, if set, is a valid cron expression."""
        if value is not None and not croniter.is_valid(value):
            raise ValueError(f"'{value}' is not a valid cron expression")

        return value

    @model_validator(mode="after")
    def _default_publisher(self) -> "CollectorConfig":
        """Defaults the publisher identifier to the tenant identifier."""
        if not self.publisher_id:
            self.publisher_id = self.tenant_id

        return self

    @property
    def mode(self) -> RunMode:
        """Returns the run mode selected by this configuration."""
        if self.schedule:
            return RunMode.recurring

        if self.import_date:
            return RunMode.backfill

        return RunMode.single


class Credential(BaseModel):
    """Defines the credential used to authenticate against the API.

    Credentials are immutable. A refreshed token results in a new credential object
    being swapped in by the token manager, so that readers never observe a token from
    one response with the expiry from another.
    """

    model_config = ConfigDict(frozen=True)

    tenant_id: str
    publisher_id: str
    client_id: str

    certificate: bytes = Field(repr=False)
    passphrase: Optional[str] = Field(None, repr=False)

    token: str = Field(str(), repr=False)
    expiry: datetime.datetime = Field(
        datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)
    )

    def valid(self, now: datetime.datetime, margin: int) -> bool:
        """Determine whether the token is valid for at least the given margin.

        :param now: The current time, in UTC.
        :param margin: The number of seconds the token must remain valid for.

        :return: Whether the token can be used without refreshing.
        """
        return now + datetime.timedelta(seconds=margin) < self.expiry
