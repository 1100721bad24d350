"""
Platform API Client

Thin requests wrapper shared by the log gateway and app listing.
"""

from typing import Any, Optional
from urllib.parse import quote

import requests

from hoist.constants import DEFAULT_API_TIMEOUT
from hoist.exceptions import RetrievalError
from hoist.services.config_service import ConfigService


class ApiClient:
    """
    HTTP client for the platform API.

    Authenticates with HTTP basic auth (username + API token) and turns
    every transport or HTTP failure into RetrievalError. No retries.
    """

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: int = DEFAULT_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.timeout = timeout
        self.session = session or requests.Session()
        if username and api_token:
            self.session.auth = (username, api_token)

    @classmethod
    def from_config(cls, config: ConfigService) -> "ApiClient":
        """Build a client from the configuration store."""
        return cls(
            base_url=config.require("api_url"),
            username=config.get("username"),
            api_token=config.get("api_token"),
            timeout=config.get("timeout", DEFAULT_API_TIMEOUT),
        )

    def url(self, *parts: str) -> str:
        """Build an API URL from path segments."""
        path = "/".join(quote(str(part), safe="") for part in parts)
        return f"{self.base_url}/{path}"

    def request(self, method: str, *parts: str, **kwargs) -> requests.Response:
        """
        Send a request and check the response status.

        Args:
            method: HTTP method
            *parts: URL path segments
            **kwargs: Passed to requests (json, params, stream, ...)

        Returns:
            Response object

        Raises:
            RetrievalError: If the request fails or returns an error status
        """
        url = self.url(*parts)
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise RetrievalError(f"Cannot reach {url}", context=str(e))

        if response.status_code >= 400:
            detail = self._error_detail(response)
            response.close()
            raise RetrievalError(
                f"{method} {url} failed with status {response.status_code}",
                context=detail,
                status_code=response.status_code,
            )

        return response

    def get_json(self, method: str, *parts: str, **kwargs) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            RetrievalError: On request failure or invalid JSON
        """
        response = self.request(method, *parts, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise RetrievalError(
                f"Invalid JSON from {response.url}", context=str(e)
            )

    def _error_detail(self, response: requests.Response) -> Optional[str]:
        """Extract an error message from an error response body."""
        try:
            body = response.json()
        except ValueError:
            text = (response.text or "").strip()
            return text[:200] or None

        if isinstance(body, dict):
            for key in ("error", "message", "reason"):
                if body.get(key):
                    return str(body[key])
        return None
