# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Provides functions used between entrypoints."""

import os
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List

from aws_lambda_powertools import Logger

from o365activity.collector import Collector
from o365activity.constants import (
    DEFAULT_CONFIG_HANDLER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_WORKER_COUNT,
    ENV_CONFIG_HANDLER,
    ENV_LOG_LEVEL,
    ENV_SECRET_HANDLER,
    ENV_WORKER_COUNT,
    LOGGER_ROOT,
    PLUGIN_GROUP_CONFIG,
    PLUGIN_GROUP_SECRET,
)
from o365activity.exceptions import O365ActivityException
from o365activity.helpers import plugin
from o365activity.logging import O365ActivityFormatter
from o365activity.models import CollectorConfig


def configure() -> List[CollectorConfig]:
    """Fetches all enabled configuration documents and associated secrets."""
    configs = plugin.load_handler(
        os.environ.get(ENV_CONFIG_HANDLER, DEFAULT_CONFIG_HANDLER),
        PLUGIN_GROUP_CONFIG,
    )

    # Immediately ignore configuration documents if they're marked as disabled.
    loaded = []

    for configuration in configs.get():
        if configuration.disabled:
            continue

        loaded.append(configuration)

    # Secret backends are optional, so if there isn't one defined, assume secrets are
    # embedded in the configuration.
    handler = os.environ.get(ENV_SECRET_HANDLER)

    if not handler:
        return loaded

    secrets = plugin.load_handler(handler, PLUGIN_GROUP_SECRET)
    return secrets.load(loaded)


def entrypoint(context: Dict[str, Any]):
    """Provides the main entrypoint.

    Every configured collector is run in its own thread. Single-shot and backfill
    collectors exit once complete, while recurring collectors run until interrupted.

    :param context: Contextual information relating to the current runtime.
    """
    logger = Logger(
        LOGGER_ROOT,
        level=str(os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper(),
        logger_formatter=O365ActivityFormatter(context),
        stream=sys.stderr,
    )
    logger.info("o365activity started")

    # Attempt to load collector configuration, failure to do so is not recoverable.
    try:
        configurations = configure()
    except O365ActivityException as err:
        logger.critical(
            "Failed to initialise configuration handler", extra={"exception": err}
        )
        return

    try:
        workers = int(os.environ.get(ENV_WORKER_COUNT, DEFAULT_WORKER_COUNT))
    except ValueError as err:
        logger.critical(
            f"Worker count ('{ENV_WORKER_COUNT}') must be a number.",
            extra={"exception": err},
        )
        return

    # Collectors are setup before any are run, so that certificates which cannot be
    # loaded are reported at startup.
    collectors = []

    for configuration in configurations:
        try:
            collectors.append(Collector(configuration, context))
        except O365ActivityException as err:
            logger.critical(
                "Failed to initialise collector, skipping.",
                extra={"exception": err, "configuration": configuration.name},
            )

    logger.info("Spawning thread pool for collectors", extra={"workers": workers})

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(collector.run): collector for collector in collectors}

        try:
            # Blocks until all threads have exited.
            for future in as_completed(futures):
                collector = futures[future]

                try:
                    future.result()
                except O365ActivityException as err:
                    logger.error(
                        "Collector exited abnormally.",
                        extra={"exception": err, "collector": collector.name},
                    )

                logger.info("Collector has exited.", extra={"collector": collector.name})
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping all collectors.")
            for collector in collectors:
                collector.stop()

    logger.info("All collectors have exited. Execution has finished.")
