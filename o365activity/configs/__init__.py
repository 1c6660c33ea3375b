# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides collector configuration storage using supported backends."""

import abc
from typing import List

from o365activity.models import CollectorConfig


class BaseConfig(abc.ABC):
    @abc.abstractmethod
    def get(self, id: str = "") -> List[CollectorConfig]:
        """Gets and returns one or more collector configuration objects.

        :param id: The identifier to use when querying for collector configuration.

        :return: A list of CollectorConfig objects.
        """
        pass
