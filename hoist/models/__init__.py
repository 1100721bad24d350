"""
Hoist CLI Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .logs import (
    LogEntry,
    LogMode,
    LogRequest,
    Scope,
    ScopeKind,
    parse_timestamp,
)
from .apps import AppSummary

__all__ = [
    # Logs
    "LogEntry",
    "LogMode",
    "LogRequest",
    "Scope",
    "ScopeKind",
    "parse_timestamp",
    # Apps
    "AppSummary",
]
