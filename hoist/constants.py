"""
Hoist CLI Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Default API Configuration
DEFAULT_API_URL = "https://api.hoist.dev"
DEFAULT_API_TIMEOUT = 30

# Default Config Locations
DEFAULT_CONFIG_PATH = "~/.hoist/config.yml"
DEFAULT_LOG_DIR = "~/.hoist/logs"
CONFIG_PATH_ENV = "HOIST_CONFIG"
ENV_PREFIX = "HOIST_"
DOTENV_FILENAME = ".env"

# Config keys that hold integers
INT_CONFIG_KEYS = ("loglength", "timeout")

# Log Query Defaults
DEFAULT_ALL_APPS_LINES = 10
DEFAULT_APP_LINES = 100
STREAM_AMOUNT_TOKENS = ("stream", "follow")
LOG_QUERY_FROM = "NOW-1YEAR"
LOG_QUERY_UNTIL = "NOW"

# Project Metadata Files (checked in order)
PROJECT_METADATA_FILES = ("hoist.yml", "package.json")

# Prompt Fields
APP_NAME_FIELD = "app name"

# Log Display
LOG_TIMESTAMP_FORMAT = "%m/%d %H:%M:%S %z"
LOG_TIMESTAMP_STYLE = "yellow"
APP_HEADER_LABEL_STYLE = "grey50"
APP_HEADER_NAME_STYLE = "magenta"

# Command Log Files
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
