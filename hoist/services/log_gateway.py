"""
Log Fetch Gateway

Historical and live log retrieval for a user or a single app.
"""

from typing import Any, List, Optional

from hoist.constants import LOG_QUERY_FROM, LOG_QUERY_UNTIL
from hoist.exceptions import RetrievalError
from hoist.models.logs import LogEntry, Scope
from hoist.services.api_client import ApiClient
from hoist.services.log_stream import LogStream


class LogGateway:
    """
    Calls the logs API on behalf of one user.

    Every remote failure surfaces as RetrievalError, unchanged.
    """

    def __init__(self, client: ApiClient, username: str):
        self.client = client
        self.username = username

    def fetch_for_user(self, username: str, amount: int) -> List[LogEntry]:
        """Fetch the latest ``amount`` log lines across all of a user's apps."""
        body = self._query(amount)
        data = self.client.get_json("POST", "logs", username, json=body)
        return self._entries(data)

    def fetch_for_app(self, app_name: str, amount: int) -> List[LogEntry]:
        """Fetch the latest ``amount`` log lines for one app."""
        body = self._query(amount)
        data = self.client.get_json(
            "POST", "logs", self.username, app_name, json=body
        )
        return self._entries(data, default_app=app_name)

    def open_user_stream(self, username: str) -> LogStream:
        """Live stream of logs across all of a user's apps."""
        return LogStream(
            Scope.user(username),
            lambda: self._open_stream("logs", username, "stream"),
        )

    def open_app_stream(self, app_name: str) -> LogStream:
        """Live stream of logs for one app."""
        return LogStream(
            Scope.app(app_name),
            lambda: self._open_stream("logs", self.username, app_name, "stream"),
            default_app=app_name,
        )

    def _open_stream(self, *parts: str):
        # Streams stay open until the server closes them
        return self.client.request("GET", *parts, stream=True, timeout=None)

    def _query(self, amount: int) -> dict:
        return {"from": LOG_QUERY_FROM, "until": LOG_QUERY_UNTIL, "rows": amount}

    def _entries(self, data: Any, default_app: Optional[str] = None) -> List[LogEntry]:
        if isinstance(data, dict):
            data = data.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            raise RetrievalError(
                "Unexpected response from logs API",
                context=f"Expected a list of log records, got {type(data).__name__}",
            )

        return [
            LogEntry.from_dict(record, default_app=default_app)
            for record in data
            if isinstance(record, dict)
        ]
