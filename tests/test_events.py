"""Tests for events.py — HTTP log sink, callback sink, notify isolation."""

import json

from testrail_cli.events import CallbackEvents, ClientEvents, HttpLogEvents, notify


def _logged(err):
    return [json.loads(line[len("[HTTP] ") :]) for line in err.splitlines() if line]


class TestHttpLogEvents:
    def test_silent_when_disabled(self, capsys):
        HttpLogEvents().request_sent("GET", "https://x/index.php?/api/v2/get_users")
        assert capsys.readouterr().err == ""

    def test_request_logs_size_not_body(self, monkeypatch, capsys):
        monkeypatch.setattr("testrail_cli.events.config.HTTP_LOG_ENABLED", True)
        HttpLogEvents().request_sent("POST", "https://x/add_run/1", '{"name": "secret"}')
        (entry,) = _logged(capsys.readouterr().err)
        assert entry == {
            "phase": "request",
            "method": "POST",
            "url": "https://x/add_run/1",
            "bytes": 18,
        }

    def test_response_and_failure(self, monkeypatch, capsys):
        monkeypatch.setattr("testrail_cli.events.config.HTTP_LOG_ENABLED", True)
        sink = HttpLogEvents()
        sink.response_received("[]")
        sink.operation_failed("HTTP RESPONSE: HTTP 404: Not Found")
        entries = _logged(capsys.readouterr().err)
        assert entries[0] == {"phase": "response", "bytes": 2}
        assert entries[1]["phase"] == "network_error"


class TestCallbackEvents:
    def test_callbacks_called_in_order(self):
        seen = []
        events = CallbackEvents()
        events.on_request_sent.append(lambda m, u, b: seen.append(("req", m, u, b)))
        events.on_response_received.append(lambda body: seen.append(("resp", body)))
        events.on_operation_failed.append(lambda msg: seen.append(("fail", msg)))
        events.request_sent("GET", "u")
        events.response_received("{}")
        events.operation_failed("boom")
        assert seen == [("req", "GET", "u", None), ("resp", "{}"), ("fail", "boom")]

    def test_multiple_subscribers(self):
        calls = []
        events = CallbackEvents()
        events.on_operation_failed.append(lambda msg: calls.append(1))
        events.on_operation_failed.append(lambda msg: calls.append(2))
        events.operation_failed("x")
        assert calls == [1, 2]


class TestNotify:
    def test_calls_hook(self):
        seen = []

        class Sink(ClientEvents):
            def operation_failed(self, message):
                seen.append(message)

        notify(Sink(), "operation_failed", "Could not close run: 1")
        assert seen == ["Could not close run: 1"]

    def test_none_events(self):
        notify(None, "request_sent", "GET", "u", None)

    def test_exception_swallowed_and_logged(self, monkeypatch, capsys):
        monkeypatch.setattr("testrail_cli.events.config.HTTP_LOG_ENABLED", True)
        events = CallbackEvents()
        events.on_response_received.append(lambda body: 1 / 0)
        notify(events, "response_received", "{}")
        entries = _logged(capsys.readouterr().err)
        assert entries[-1]["phase"] == "observer_error"
        assert entries[-1]["hook"] == "response_received"
        assert "ZeroDivisionError" in entries[-1]["error"]
