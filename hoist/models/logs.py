"""
Log Models

Dataclass models for log entries and log queries.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Union

from hoist.constants import STREAM_AMOUNT_TOKENS
from hoist.exceptions import ValidationError

# "+0000" style offsets after a time of day
COMPACT_OFFSET = re.compile(r"(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)([+-]\d{2})(\d{2})$")
FRACTION = re.compile(r"\.(\d+)")


class LogMode(Enum):
    """How logs are retrieved."""

    HISTORICAL = "historical"
    STREAM = "stream"


class ScopeKind(Enum):
    """What a log query targets."""

    USER = "user"
    APP = "app"


@dataclass(frozen=True)
class Scope:
    """Target of a log query: a username (all apps) or a single app."""

    kind: ScopeKind
    name: str

    @classmethod
    def user(cls, username: str) -> "Scope":
        return cls(ScopeKind.USER, username)

    @classmethod
    def app(cls, app_name: str) -> "Scope":
        return cls(ScopeKind.APP, app_name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LogEntry:
    """A single log record as returned by the logs API."""

    app: str
    timestamp: Union[str, int, float]
    message: Optional[str] = None

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], default_app: Optional[str] = None
    ) -> "LogEntry":
        """
        Build an entry from an API record.

        Args:
            data: Raw record (needs at least ``timestamp``)
            default_app: App name to use when the record has none

        Returns:
            LogEntry instance
        """
        return cls(
            app=data.get("app") or default_app or "",
            timestamp=data.get("timestamp"),
            message=data.get("message"),
        )

    @property
    def parsed_time(self) -> datetime:
        """
        Timestamp as an aware datetime.

        Numbers are epoch milliseconds. Naive ISO strings are local time.

        Raises:
            ValueError: If the timestamp cannot be parsed
        """
        return parse_timestamp(self.timestamp)


def parse_timestamp(value: Union[str, int, float, None]) -> datetime:
    """
    Parse an API timestamp into an aware datetime.

    Accepts ``Z``, ``+HH:MM`` and ``+HHMM`` offsets and fractions of any
    length.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid log timestamp: {value!r}")

    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = COMPACT_OFFSET.sub(r"\1\2:\3", text)
    text = FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid log timestamp: {value!r}") from None

    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


@dataclass(frozen=True)
class LogRequest:
    """Explicit log query built from normalized command arguments."""

    target: Optional[str] = None
    amount: Optional[Union[str, int]] = None

    @classmethod
    def from_args(cls, args: Iterable[Any]) -> "LogRequest":
        """Build a request from ``(target, amount)`` positionals."""
        values = list(args) + [None, None]
        target, amount = values[0], values[1]
        return cls(target=target or None, amount=amount or None)

    @property
    def mode(self) -> LogMode:
        if self.amount in STREAM_AMOUNT_TOKENS:
            return LogMode.STREAM
        return LogMode.HISTORICAL

    @property
    def is_stream(self) -> bool:
        return self.mode is LogMode.STREAM

    def line_count(self, default: int) -> int:
        """
        Number of lines to request in historical mode.

        Args:
            default: Value used when no amount was given

        Raises:
            ValidationError: If amount is not a positive integer
        """
        if self.amount is None:
            return default

        try:
            count = int(self.amount)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Invalid amount '{self.amount}'",
                context="Use a number of lines, 'stream' or 'follow'",
            ) from None

        if count < 1:
            raise ValidationError(
                f"Invalid amount '{self.amount}'",
                context="Number of lines must be at least 1",
            )
        return count

    def with_target(self, target: str) -> "LogRequest":
        return LogRequest(target=target, amount=self.amount)
