"""Observer hooks fired around every outbound TestRail call.

A client holds one ClientEvents instance. The transport invoker calls
``request_sent`` before dispatch and then exactly one of
``response_received`` / ``operation_failed``. Hooks carry no control-flow
meaning: an exception raised inside a hook is logged and dropped.
"""

from __future__ import annotations

import json
import sys

from testrail_cli import config


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


class ClientEvents:
    """No-op base. Subclass and override the hooks you care about."""

    def request_sent(self, method: str, uri: str, body: str | None = None) -> None:
        pass

    def response_received(self, body: str) -> None:
        pass

    def operation_failed(self, message: str) -> None:
        pass


class HttpLogEvents(ClientEvents):
    """Default sink: structured ``[HTTP]`` lines on stderr (see config.HTTP_LOG_ENABLED)."""

    def request_sent(self, method, uri, body=None):
        _log_http_event(
            phase="request",
            method=method,
            url=uri,
            bytes=len(body.encode("utf-8")) if body else 0,
        )

    def response_received(self, body):
        _log_http_event(phase="response", bytes=len(body.encode("utf-8")) if body else 0)

    def operation_failed(self, message):
        _log_http_event(phase="network_error", error=message)


class CallbackEvents(HttpLogEvents):
    """Sink that forwards every hook to registered callables.

    Example:
        events = CallbackEvents()
        events.on_request_sent.append(lambda method, uri, body: ...)
        client = TestRailClient(url, user, password, events=events)
    """

    def __init__(self):
        self.on_request_sent = []
        self.on_response_received = []
        self.on_operation_failed = []

    def request_sent(self, method, uri, body=None):
        super().request_sent(method, uri, body)
        for callback in list(self.on_request_sent):
            callback(method, uri, body)

    def response_received(self, body):
        super().response_received(body)
        for callback in list(self.on_response_received):
            callback(body)

    def operation_failed(self, message):
        super().operation_failed(message)
        for callback in list(self.on_operation_failed):
            callback(message)


def notify(events, hook, *args):
    """Fire ``events.<hook>(*args)``; a failing observer never breaks the call."""
    if events is None:
        return
    try:
        getattr(events, hook)(*args)
    except Exception as e:
        _log_http_event(phase="observer_error", hook=hook, error=f"{type(e).__name__}: {e}")
