# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Runs all configured collectors in the current process.

This is the entrypoint behind the `o365activity` console script.
"""

import os
import platform
import socket
from typing import Dict

from o365activity.__about__ import __version__
from o365activity.entrypoints import base


def runtime_information() -> Dict[str, str]:
    """Returns information about this process, added to every log message.

    :return: A dictionary of runtime data.
    """
    return {
        "runtime_id": str(os.getpid()),
        "runtime_host": socket.gethostname(),
        "runtime_python": platform.python_version(),
        "version": __version__,
    }


def entrypoint():
    base.entrypoint(context={"runtime": __file__, **runtime_information()})


if __name__ == "__main__":
    entrypoint()
