"""
Shared test fixtures for testrail-cli tests.
Patches config module to avoid loading a real .env and making API calls.
"""

import json

import pytest

from testrail_cli.client import TestRailClient
from testrail_cli.events import ClientEvents
from testrail_cli.exceptions import HTTPError


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or leaking runtime flags."""
    from testrail_cli import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "BASE_URL", "https://fake.testrail.io")
    monkeypatch.setattr(config, "USERNAME", "qa@example.com")
    monkeypatch.setattr(config, "PASSWORD", "fake-api-key")
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "RUNTIME_QUIET", False)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)


class FakeTransport:
    """Transport double: records calls and answers by endpoint.

    ``routes`` maps an endpoint fragment (e.g. ``"get_cases/1"``) to a body
    (dict/list are JSON-encoded, str is returned as-is) or an exception to
    raise. The longest matching fragment wins; unmatched calls return "{}".
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def __call__(self, url, body, headers, method):
        self.calls.append(
            {
                "url": url,
                "body": json.loads(body) if body else None,
                "headers": headers,
                "method": method,
            }
        )
        matches = [key for key in self.routes if key in url]
        if not matches:
            return "{}"
        answer = self.routes[max(matches, key=len)]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, (dict, list)):
            return json.dumps(answer)
        return answer

    def urls(self):
        return [c["url"] for c in self.calls]

    def count(self, fragment):
        return sum(1 for c in self.calls if fragment in c["url"])


class RecordingEvents(ClientEvents):
    """Observer that records every notification in order."""

    def __init__(self):
        self.log = []

    def request_sent(self, method, uri, body=None):
        self.log.append(("request_sent", method, uri, body))

    def response_received(self, body):
        self.log.append(("response_received", body))

    def operation_failed(self, message):
        self.log.append(("operation_failed", message))


def http_error(code, reason="Error", body=""):
    return HTTPError(code, reason, body)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def events():
    return RecordingEvents()


@pytest.fixture
def client(transport, events):
    return TestRailClient(
        "https://fake.testrail.io",
        "qa@example.com",
        "fake-api-key",
        events=events,
        transport=transport,
    )
