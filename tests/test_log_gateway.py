# Tests for the API client and log gateway

from unittest.mock import Mock

import pytest
import requests

from hoist.exceptions import RetrievalError
from hoist.models.logs import LogEntry, Scope
from hoist.services.api_client import ApiClient
from hoist.services.log_gateway import LogGateway
from hoist.services.log_stream import LogStream


def make_response(status_code=200, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.url = "https://api.example.test/x"
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


def make_client(response=None, error=None):
    session = Mock()
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = response
    return ApiClient("https://api.example.test/", "alice", "secret", timeout=7, session=session)


class TestApiClient:
    def test_sets_basic_auth(self):
        client = make_client(make_response())
        assert client.session.auth == ("alice", "secret")

    def test_no_auth_without_token(self):
        session = Mock(spec=["request"])
        ApiClient("https://api.example.test", "alice", None, session=session)
        assert not hasattr(session, "auth")

    def test_url_quotes_segments(self):
        client = make_client(make_response())
        assert client.url("logs", "alice", "my app") == (
            "https://api.example.test/logs/alice/my%20app"
        )

    def test_request_uses_default_timeout(self):
        client = make_client(make_response())
        client.request("GET", "apps", "alice")

        client.session.request.assert_called_once_with(
            "GET", "https://api.example.test/apps/alice", timeout=7
        )

    def test_transport_error_becomes_retrieval_error(self):
        client = make_client(error=requests.ConnectionError("refused"))

        with pytest.raises(RetrievalError) as exc_info:
            client.request("GET", "apps", "alice")

        assert "refused" in exc_info.value.context
        assert exc_info.value.status_code is None

    def test_error_status_becomes_retrieval_error(self):
        response = make_response(403, {"error": "Not authorized"})
        client = make_client(response)

        with pytest.raises(RetrievalError) as exc_info:
            client.request("POST", "logs", "alice")

        assert exc_info.value.status_code == 403
        assert exc_info.value.context == "Not authorized"
        response.close.assert_called_once()

    def test_error_status_with_text_body(self):
        response = make_response(500, ValueError("no json"), text="Internal Server Error")
        client = make_client(response)

        with pytest.raises(RetrievalError) as exc_info:
            client.request("GET", "apps", "alice")

        assert exc_info.value.context == "Internal Server Error"

    def test_invalid_json(self):
        client = make_client(make_response(200, ValueError("bad json")))

        with pytest.raises(RetrievalError):
            client.get_json("GET", "apps", "alice")


class TestLogGateway:
    def test_fetch_for_user(self):
        response = make_response(
            200,
            {
                "data": [
                    {"app": "api", "timestamp": "2024-01-01T00:00:00Z", "message": "a"},
                    {"app": "web", "timestamp": "2024-01-01T00:00:01Z", "message": "b"},
                ]
            },
        )
        client = make_client(response)
        gateway = LogGateway(client, "alice")

        entries = gateway.fetch_for_user("alice", 10)

        assert entries == [
            LogEntry("api", "2024-01-01T00:00:00Z", "a"),
            LogEntry("web", "2024-01-01T00:00:01Z", "b"),
        ]
        client.session.request.assert_called_once_with(
            "POST",
            "https://api.example.test/logs/alice",
            json={"from": "NOW-1YEAR", "until": "NOW", "rows": 10},
            timeout=7,
        )

    def test_fetch_for_app_accepts_bare_list(self):
        response = make_response(200, [{"timestamp": 0, "message": "m"}])
        client = make_client(response)

        entries = LogGateway(client, "alice").fetch_for_app("api", 100)

        assert entries == [LogEntry("api", 0, "m")]
        args, kwargs = client.session.request.call_args
        assert args == ("POST", "https://api.example.test/logs/alice/api")
        assert kwargs["json"]["rows"] == 100

    def test_missing_data_is_empty(self):
        client = make_client(make_response(200, {}))
        assert LogGateway(client, "alice").fetch_for_user("alice", 10) == []

    def test_unexpected_payload(self):
        client = make_client(make_response(200, {"data": "oops"}))
        with pytest.raises(RetrievalError):
            LogGateway(client, "alice").fetch_for_user("alice", 10)

    def test_fetch_error_propagates_unchanged(self):
        error = RetrievalError("boom")
        client = Mock()
        client.get_json.side_effect = error

        with pytest.raises(RetrievalError) as exc_info:
            LogGateway(client, "alice").fetch_for_app("api", 5)

        assert exc_info.value is error

    def test_open_user_stream_is_lazy(self):
        client = make_client(make_response())
        stream = LogGateway(client, "alice").open_user_stream("alice")

        assert isinstance(stream, LogStream)
        assert stream.scope == Scope.user("alice")
        client.session.request.assert_not_called()

    def test_open_app_stream_requests_on_pump(self):
        response = make_response()
        response.iter_lines.return_value = iter(
            ['{"timestamp": 0, "message": "live"}']
        )
        client = make_client(response)
        stream = LogGateway(client, "alice").open_app_stream("api")
        received = []
        stream.on("log", received.append)

        stream.pump()

        client.session.request.assert_called_once_with(
            "GET",
            "https://api.example.test/logs/alice/api/stream",
            stream=True,
            timeout=None,
        )
        assert received == [LogEntry("api", 0, "live")]

