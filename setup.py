# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Minimal setup for o365activity."""
import os

from setuptools import find_packages, setup

# These will be overwritten by the values from __about__.py
__version__ = "0.0.0"
__author__ = "Not Defined"

path = os.path.dirname(os.path.abspath(__file__))
exec(open(os.path.join(path, "o365activity/__about__.py")).read())  # noqa: S102

# Load the long description for PyPi.
long_description = open(os.path.join(path, "README.md")).read()

setup(
    name="o365activity",
    version=__version__,
    author=__author__,
    packages=find_packages(include=["o365activity", "o365activity.*"]),
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    install_requires=[
        "aws-lambda-powertools>=2.0.0",
        "azure-core>=1.26.0",
        "azure-identity>=1.12.0",
        "croniter>=1.3.0",
        "cryptography>=39.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0.0",
            "responses>=0.22.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "o365activity = o365activity.entrypoints.local_process:entrypoint",
        ],
        "o365activity.outputs": [
            "local_file = o365activity.outputs.local_file:Handler",
            "local_stdout = o365activity.outputs.local_stdout:Handler",
        ],
        "o365activity.configs": [
            "local_file = o365activity.configs.local_file:Handler",
        ],
        "o365activity.secrets": [
            "local_file = o365activity.secrets.local_file:Handler",
        ],
        "o365activity.triggers": [
            "local_cron = o365activity.triggers.local_cron:Handler",
        ],
    },
)
