from unittest.mock import Mock

import pytest

from hoist.exceptions import RetrievalError
from hoist.models.apps import AppSummary
from hoist.services.apps_service import AppsService


def make_service(payload, console):
    client = Mock()
    client.get_json.return_value = payload
    return AppsService(client, console), client


def test_list_apps_sorted(console):
    service, client = make_service(
        {"apps": [{"name": "web", "state": "stopped"}, {"name": "api", "state": "started"}]},
        console,
    )

    apps = service.list_apps("alice")

    client.get_json.assert_called_once_with("GET", "apps", "alice")
    assert [app.name for app in apps] == ["api", "web"]


def test_list_apps_bare_list(console):
    service, _ = make_service([{"name": "api"}], console)
    assert service.list_apps("alice")[0].name == "api"


def test_list_apps_bad_payload(console):
    service, _ = make_service({"apps": "nope"}, console)
    with pytest.raises(RetrievalError):
        service.list_apps("alice")


def test_print_apps_table(console):
    service, _ = make_service([], console)
    service.print_apps([AppSummary("api", "started", "api-alice", "3")])

    output = console.file.getvalue()
    assert "Applications (1)" in output
    assert "api-alice" in output
    assert "started" in output


def test_print_no_apps(console):
    service, _ = make_service([], console)
    service.print_apps([], "alice")
    assert "No applications for alice" in console.file.getvalue()
