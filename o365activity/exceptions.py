# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Exceptions used by o365activity."""


class O365ActivityException(Exception):
    """All exceptions should inherit from this to allow for hierarchical handling."""


class ConfigurationException(O365ActivityException):
    """Indicates that a configuration related error has occurred."""


class RequestFailedException(O365ActivityException):
    """Indicates that an upstream request failed for an unhandled reason."""


class AccessException(O365ActivityException):
    """Indicates an issue occurred while attempting to access the requested resource."""


class DataFormatException(O365ActivityException):
    """Indicates an issue occurred while attempting to process data."""
