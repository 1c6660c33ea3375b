# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Local file configuration handler."""

import glob
import json
import logging
from json import JSONDecodeError
from typing import List

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from o365activity.configs import BaseConfig
from o365activity.exceptions import ConfigurationException
from o365activity.helpers import parsing
from o365activity.models import CollectorConfig

ENV_PREFIX = "O365ACTIVITY_CONFIG_LOCAL_FILE_"


class Configuration(BaseSettings):
    """Defines environment variables used to configure the local file handler.

    As an example the field `path` would be set using the environment variable
    `O365ACTIVITY_CONFIG_LOCAL_FILE_PATH`.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
    )

    path: str = Field(
        description="The directory path containing collector configuration documents.",
    )


class Handler(BaseConfig):
    """A configuration handler to read configuration documents from local files."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        # Wrap validation errors to keep them in the o365activity exception hierarchy.
        try:
            self.config = Configuration()  # type: ignore
        except ValidationError as err:
            raise ConfigurationException(parsing.validation_error(err, ENV_PREFIX))

    def get(self, id: str = "") -> List[CollectorConfig]:
        """Get and return all collector configuration documents from local files.

        :param id: Not used.

        :return: A list of collector configuration objects.
        """
        collectors = []

        for path in sorted(glob.glob(f"{self.config.path}/**/*.json", recursive=True)):
            with open(path, "r") as f:
                # We don't want a single bad configuration document to break
                # collection, so log an error and continue on a bad document.
                try:
                    collectors.append(CollectorConfig(**json.load(f)))
                except (JSONDecodeError, ValidationError, TypeError) as err:
                    self.logger.error(
                        "Unable to load collector configuration",
                        extra={"path": path, "exception": err},
                    )
                    continue

        return collectors
