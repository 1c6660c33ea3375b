# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Package metadata for o365activity."""

__title__ = "o365activity"
__version__ = "0.1.0"
__author__ = "HashiCorp Security (TDR)"
__copyright__ = "Copyright (c) HashiCorp, Inc."

__all__ = ["__title__", "__version__", "__author__", "__copyright__"]
