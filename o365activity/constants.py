# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Constants used throughout o365activity."""

# The root logger name, all module loggers are children of this.
LOGGER_ROOT = "o365activity"

# The Management Activity API.
API_HOST = "manage.office.com"
API_BASE_URI = "https://{host}/api/v1.0/{tenant_id}/activity/feed"
API_SCOPE = "https://{host}/.default"

# The header used by the API to indicate another page of content is available.
HEADER_NEXT_PAGE = "NextPageUri"

# The query parameter used to identify the publisher on every call.
PARAM_PUBLISHER = "PublisherIdentifier"

# The date format expected by the content listing API, minute granularity.
WINDOW_FORMAT = "%Y-%m-%dT%H:%M"

# Common datestamp format used by output handlers.
DATESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# The content listing API only retains content for this many days.
CONTENT_RETENTION_DAYS = 7

# Refresh tokens this many seconds before they expire.
TOKEN_SAFETY_MARGIN = 600  # seconds.

# Environment variable names, used to override runtime settings.
ENV_OUTPUT_HANDLER = "O365ACTIVITY_OUTPUT_HANDLER"
ENV_CONFIG_HANDLER = "O365ACTIVITY_CONFIG_HANDLER"
ENV_SECRET_HANDLER = "O365ACTIVITY_SECRET_HANDLER"  # noqa: S105
ENV_TRIGGER_HANDLER = "O365ACTIVITY_TRIGGER_HANDLER"
ENV_WORKER_COUNT = "O365ACTIVITY_WORKER_COUNT"
ENV_LOG_LEVEL = "O365ACTIVITY_LOG_LEVEL"

# Plugin groups (setuptools entrypoints).
PLUGIN_GROUP_OUTPUT = "o365activity.outputs"
PLUGIN_GROUP_CONFIG = "o365activity.configs"
PLUGIN_GROUP_SECRET = "o365activity.secrets"  # noqa: S105
PLUGIN_GROUP_TRIGGER = "o365activity.triggers"

# Define defaults for unset environment variables.
DEFAULT_OUTPUT_HANDLER = "local_stdout"
DEFAULT_CONFIG_HANDLER = "local_file"
DEFAULT_TRIGGER_HANDLER = "local_cron"
DEFAULT_LOG_LEVEL = "INFO"

# Maximum number of collectors to execute concurrently.
DEFAULT_WORKER_COUNT = 10

# Collector configuration defaults.
DEFAULT_TIMERANGE = 10  # minutes.
DEFAULT_DAYS_TO_IMPORT = 1
DEFAULT_FETCH_WORKERS = 10
DEFAULT_REQUEST_TIMEOUT = 30  # seconds.
