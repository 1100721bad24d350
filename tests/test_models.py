from datetime import datetime, timedelta, timezone

import pytest

from hoist.exceptions import ValidationError
from hoist.models import AppSummary, LogEntry, LogMode, LogRequest, Scope, ScopeKind
from hoist.models.logs import parse_timestamp


class TestLogEntry:
    def test_from_dict(self):
        entry = LogEntry.from_dict(
            {"app": "api", "timestamp": "2024-01-01T00:00:00Z", "message": "hi"}
        )
        assert entry == LogEntry("api", "2024-01-01T00:00:00Z", "hi")

    def test_from_dict_default_app(self):
        entry = LogEntry.from_dict({"timestamp": 0, "message": "hi"}, default_app="web")
        assert entry.app == "web"

    def test_from_dict_missing_message_is_none(self):
        entry = LogEntry.from_dict({"app": "api", "timestamp": 0})
        assert entry.message is None

    def test_entries_are_immutable(self):
        entry = LogEntry("api", 0, "hi")
        with pytest.raises(AttributeError):
            entry.message = "changed"


class TestParseTimestamp:
    def test_zulu(self):
        assert parse_timestamp("2024-01-01T12:30:00Z") == datetime(
            2024, 1, 1, 12, 30, tzinfo=timezone.utc
        )

    def test_offset(self):
        parsed = parse_timestamp("2024-01-01T12:30:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_naive_is_local_time(self):
        # Local time is UTC in tests
        parsed = parse_timestamp("2024-01-01T12:30:00")
        assert parsed.tzinfo is not None
        assert parsed == datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)

    def test_epoch_millis(self):
        assert parse_timestamp(1000) == datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)

    def test_compact_offset(self):
        parsed = parse_timestamp("2024-01-01T12:30:00+0000")
        assert parsed == datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)

    def test_compact_negative_offset_with_fraction(self):
        parsed = parse_timestamp("2024-01-01T12:30:00.5-0130")
        assert parsed.utcoffset() == -timedelta(hours=1, minutes=30)
        assert parsed.microsecond == 500000

    @pytest.mark.parametrize(
        "value, micros",
        [
            ("2024-01-01T00:00:00.12Z", 120000),
            ("2024-01-01T00:00:00.1234Z", 123400),
            ("2024-01-01T00:00:00.123456789Z", 123456),
        ],
    )
    def test_fractions_of_any_length(self, value, micros):
        assert parse_timestamp(value).microsecond == micros

    def test_date_only_is_not_mistaken_for_offset(self):
        assert parse_timestamp("2024-01-01").day == 1

    @pytest.mark.parametrize("value", ["nope", "", None, True])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestLogRequest:
    @pytest.mark.parametrize("amount", ["stream", "follow"])
    def test_stream_tokens(self, amount):
        request = LogRequest(target="api", amount=amount)
        assert request.mode is LogMode.STREAM
        assert request.is_stream

    @pytest.mark.parametrize("amount", [None, "10", 25, "streaming"])
    def test_historical(self, amount):
        assert LogRequest(amount=amount).mode is LogMode.HISTORICAL

    def test_line_count_default(self):
        assert LogRequest().line_count(100) == 100

    def test_line_count_parses_strings(self):
        assert LogRequest(amount="40").line_count(100) == 40

    @pytest.mark.parametrize("amount", ["abc", "0", "-5", "1.5"])
    def test_line_count_rejects_bad_amounts(self, amount):
        with pytest.raises(ValidationError):
            LogRequest(amount=amount).line_count(10)

    def test_from_args(self):
        assert LogRequest.from_args(("api", "5")) == LogRequest("api", "5")
        assert LogRequest.from_args(("",)) == LogRequest(None, None)

    def test_with_target_keeps_amount(self):
        request = LogRequest(amount="stream").with_target("api")
        assert request == LogRequest("api", "stream")


def test_scope_constructors():
    assert Scope.user("alice") == Scope(ScopeKind.USER, "alice")
    assert Scope.app("api").kind is ScopeKind.APP
    assert str(Scope.app("api")) == "api"


def test_app_summary_from_dict():
    app = AppSummary.from_dict(
        {"name": "api", "state": "started", "subdomain": "api-alice", "version": 3}
    )
    assert app.name == "api"
    assert app.snapshot == "3"


def test_app_summary_defaults():
    app = AppSummary.from_dict({"name": "web"})
    assert app.state == "unknown"
