"""Tests for api.py — helpers, the urllib transport, and the invoker."""

import base64
import io
import urllib.error
from unittest.mock import patch

import pytest

from conftest import FakeTransport, RecordingEvents
from testrail_cli.api import (
    _describe_failure,
    _http_request,
    _safe_json_parse,
    _sanitize_error,
    api_url,
    basic_auth,
    build_headers,
    invoke,
)
from testrail_cli.events import ClientEvents
from testrail_cli.exceptions import CliError, HTTPError, TransportError


class TestSafeJsonParse:
    def test_valid_json(self):
        assert _safe_json_parse('{"a": 1}') == {"a": 1}

    def test_invalid_json_raises(self):
        with pytest.raises(CliError) as exc_info:
            _safe_json_parse("not json", "--custom")
        assert "--custom" in str(exc_info.value)
        assert exc_info.value.exit_code == 1


class TestSanitizeError:
    def test_strips_html(self):
        assert _sanitize_error("<h1>Error</h1><p>Details</p>") == "ErrorDetails"

    def test_truncates_long_body(self):
        result = _sanitize_error("x" * 1000)
        assert result.endswith("... [truncated]")
        assert len(result) <= 520

    def test_empty_body(self):
        assert _sanitize_error("") == ""
        assert _sanitize_error(None) == ""

    def test_collapses_whitespace(self):
        assert _sanitize_error("a   b\n\n  c") == "a b c"


class TestHeaders:
    def test_basic_auth(self):
        value = basic_auth("qa@example.com", "secret")
        assert value.startswith("Basic ")
        decoded = base64.b64decode(value[len("Basic ") :]).decode("utf-8")
        assert decoded == "qa@example.com:secret"

    def test_build_headers(self):
        headers = build_headers("Basic abc")
        assert headers["Authorization"] == "Basic abc"
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/json"
        assert headers["X-Request-Id"]

    def test_request_id_changes_per_call(self):
        assert build_headers("x")["X-Request-Id"] != build_headers("x")["X-Request-Id"]


class TestApiUrl:
    def test_appends_index(self):
        url = api_url("https://fake.testrail.io/", "?/api/v2/get_projects")
        assert url == "https://fake.testrail.io/index.php?/api/v2/get_projects"

    def test_keeps_existing_index(self):
        url = api_url("https://fake.testrail.io/index.php", "?/api/v2/get_case/1")
        assert url == "https://fake.testrail.io/index.php?/api/v2/get_case/1"

    def test_sub_path_install(self):
        url = api_url("https://corp.example.com/testrail", "?/api/v2/get_users")
        assert url == "https://corp.example.com/testrail/index.php?/api/v2/get_users"


class TestHttpRequest:
    @patch("testrail_cli.api.urllib.request.urlopen")
    def test_returns_text(self, mock_urlopen):
        mock_resp = mock_urlopen.return_value.__enter__.return_value
        mock_resp.read.return_value = b'{"id": 1}'
        assert _http_request("https://x/index.php?/api/v2/get_case/1") == '{"id": 1}'

    @patch("testrail_cli.api.urllib.request.urlopen")
    def test_sends_method_and_body(self, mock_urlopen):
        mock_urlopen.return_value.__enter__.return_value.read.return_value = b"{}"
        _http_request("https://x/", '{"a": 1}', {"Accept": "application/json"}, "POST")
        req = mock_urlopen.call_args.args[0]
        assert req.get_method() == "POST"
        assert req.data == b'{"a": 1}'

    @patch("testrail_cli.api.urllib.request.urlopen")
    def test_http_error_mapped(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.HTTPError(
            "https://x/", 404, "Not Found", {}, io.BytesIO(b'{"error": "Field :case_id"}')
        )
        with pytest.raises(HTTPError) as exc_info:
            _http_request("https://x/")
        assert exc_info.value.code == 404
        assert "case_id" in exc_info.value.body

    @patch("testrail_cli.api.urllib.request.urlopen")
    def test_connection_error_mapped(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.URLError("refused")
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://x/")
        assert "Connection failed" in str(exc_info.value)

    @patch("testrail_cli.api.urllib.request.urlopen")
    def test_timeout_mapped(self, mock_urlopen):
        mock_urlopen.side_effect = TimeoutError()
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://x/")
        assert "timed out" in str(exc_info.value)

    @patch("testrail_cli.api.urllib.request.urlopen")
    def test_response_size_limit(self, mock_urlopen, monkeypatch):
        monkeypatch.setattr("testrail_cli.api.config.HTTP_MAX_RESPONSE_BYTES", 4)
        mock_urlopen.return_value.__enter__.return_value.read.return_value = b"12345"
        with pytest.raises(TransportError) as exc_info:
            _http_request("https://x/")
        assert "too large" in str(exc_info.value)

    @patch("testrail_cli.api.urllib.request.urlopen")
    def test_non_utf8_rejected(self, mock_urlopen):
        mock_urlopen.return_value.__enter__.return_value.read.return_value = b"\xff\xfe"
        with pytest.raises(TransportError):
            _http_request("https://x/")


class TestDescribeFailure:
    def test_http_error_with_body(self):
        err = HTTPError(400, "Bad Request", "<b>Field :title is required</b>")
        assert _describe_failure(err) == "HTTP 400: Bad Request: Field :title is required"

    def test_http_error_without_body(self):
        assert _describe_failure(HTTPError(503, "Service Unavailable", "")) == (
            "HTTP 503: Service Unavailable"
        )

    def test_other_error(self):
        assert _describe_failure(TransportError("down")) == "TransportError: down"


class TestInvoke:
    def test_success(self):
        transport = FakeTransport({"get_case/1": {"id": 1}})
        events = RecordingEvents()
        result = invoke("u/get_case/1", "GET", {}, events=events, transport=transport)
        assert result.was_successful is True
        assert result.value == '{"id": 1}'
        assert result.status == 200
        assert [e[0] for e in events.log] == ["request_sent", "response_received"]

    def test_request_notification_precedes_dispatch(self):
        events = RecordingEvents()

        def transport(url, body, headers, method):
            assert events.log == [("request_sent", "POST", "u", '{"a": 1}')]
            return "{}"

        invoke("u", "POST", {}, '{"a": 1}', events=events, transport=transport)

    def test_http_failure_captured(self):
        transport = FakeTransport({"get_case/9": HTTPError(404, "Not Found", "")})
        events = RecordingEvents()
        result = invoke("u/get_case/9", "GET", {}, events=events, transport=transport)
        assert result.was_successful is False
        assert result.status == 404
        assert "404" in result.value
        assert isinstance(result.error, HTTPError)
        assert events.log[-1] == ("operation_failed", "HTTP RESPONSE: HTTP 404: Not Found")

    def test_arbitrary_exception_captured(self):
        def transport(url, body, headers, method):
            raise ValueError("boom")

        result = invoke("u", "GET", {}, transport=transport)
        assert result.was_successful is False
        assert result.status is None
        assert isinstance(result.error, ValueError)

    def test_exactly_one_transport_call(self):
        transport = FakeTransport({"u": HTTPError(500, "Internal Server Error", "")})
        invoke("u", "GET", {}, transport=transport)
        assert len(transport.calls) == 1

    def test_empty_body_is_success(self):
        result = invoke("u", "POST", {}, transport=lambda *a: "")
        assert result.was_successful is True
        assert result.value == ""

    def test_failing_observer_is_ignored(self):
        class Broken(ClientEvents):
            def request_sent(self, method, uri, body=None):
                raise RuntimeError("observer bug")

            def response_received(self, body):
                raise RuntimeError("observer bug")

        result = invoke("u", "GET", {}, events=Broken(), transport=lambda *a: '{"id": 3}')
        assert result.was_successful is True
        assert result.value == '{"id": 3}'

    def test_failing_observer_is_logged(self, monkeypatch, capsys):
        monkeypatch.setattr("testrail_cli.events.config.HTTP_LOG_ENABLED", True)

        class Broken(ClientEvents):
            def response_received(self, body):
                raise RuntimeError("observer bug")

        invoke("u", "GET", {}, events=Broken(), transport=lambda *a: "{}")
        err = capsys.readouterr().err
        assert '"phase": "observer_error"' in err
        assert "observer bug" in err

    def test_no_events(self):
        result = invoke("u", "GET", {}, events=None, transport=lambda *a: "[]")
        assert result.was_successful is True
