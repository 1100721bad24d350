"""
Hoist CLI Services Layer

Centralized business logic and operations for CLI commands.
"""

from .config_service import ConfigService
from .api_client import ApiClient
from .apps_service import AppsService
from .log_gateway import LogGateway
from .log_stream import LogStream, LogSubscription, consume_stream
from .metadata_service import ProjectMetadataReader
from .prompt_service import PromptService
from .logs_service import LogsService

__all__ = [
    "ConfigService",
    "ApiClient",
    "AppsService",
    "LogGateway",
    "LogStream",
    "LogSubscription",
    "consume_stream",
    "ProjectMetadataReader",
    "PromptService",
    "LogsService",
]
