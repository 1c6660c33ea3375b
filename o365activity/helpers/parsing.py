# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides helpers for parsing."""

from pydantic import ValidationError


def validation_error(exc: ValidationError, prefix: str = "") -> str:
    """Parse Pydantic validation exceptions into a user readable string.

    :param exc: The Pydantic ValidationError to parse.
    :param prefix: An optional environment variable prefix to add to field names.

    :return: The exception as a string, including fields with validation errors.
    """
    message = f"{exc.title} is not valid"

    # Ensure the validation errors are included in the logged error message.
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        if prefix:
            field = f"{prefix}{field}".upper()

        message = f"{message}, {field} {error['msg']}"

    return message
