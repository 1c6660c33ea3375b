# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Local file secrets handler."""

import logging
import os

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from o365activity.exceptions import AccessException, ConfigurationException
from o365activity.helpers import parsing
from o365activity.secrets import BaseSecret

ENV_PREFIX = "O365ACTIVITY_SECRET_LOCAL_FILE_"


class Configuration(BaseSettings):
    """Defines environment variables used to configure the local file handler.

    As an example the field `path_prefix` would be set using the environment variable
    `O365ACTIVITY_SECRET_LOCAL_FILE_PATH_PREFIX`.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
    )

    path_prefix: str = Field(
        str(),
        description="An optional prefix to append to configured secret paths.",
    )


class Handler(BaseSecret):
    """A secret handler to read secrets from local files."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        try:
            self.config = Configuration()  # type: ignore
        except ValidationError as err:
            raise ConfigurationException(parsing.validation_error(err, ENV_PREFIX))

    def get(self, id: str) -> str:
        """Gets and returns a secret from the specified file path.

        If a path prefix is configured it is prepended to the secret path, unless the
        path of the secret begins with a '/'.

        :param id: The file to read the secret from.

        :raises AccessException: The secret could not be read.

        :return: The plain-text secret, read from the specified file.
        """
        path = os.path.join(self.config.path_prefix, id)

        try:
            with open(path, "rb") as f:
                secret = str(f.read(), "utf-8").rstrip()
        except (OSError, UnicodeDecodeError) as err:
            raise AccessException(
                f"Unable to read secret from configured '{path}'. {err}"
            )

        return secret
