"""
HTTP request layer and security helpers for testrail-cli.

``_http_request`` is the default transport: one urllib round-trip, no
retries. ``invoke`` wraps a transport call with observer notifications and
turns every fault into an unsuccessful CallResult.
"""

import base64
import json
import re
import urllib.error
import urllib.request
import uuid

from testrail_cli import config
from testrail_cli.events import notify
from testrail_cli.exceptions import CliError, HTTPError, TransportError
from testrail_cli.results import CallResult

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _safe_json_parse(text, context="input"):
    """Parse JSON with friendly error message on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CliError(f"[ERROR] Invalid JSON in {context}: {e.msg} at position {e.pos}") from None


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def basic_auth(username, password):
    """Build the Authorization header value for TestRail basic auth."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def build_headers(auth):
    """Fixed header set sent with every request."""
    return {
        "Authorization": auth,
        "Accept": "application/json",
        "Content-Type": "application/json",
        "X-Request-Id": str(uuid.uuid4()),
    }


def api_url(base_url, path):
    """Join the instance URL and an endpoint path into a full request URL."""
    base = (base_url or "").rstrip("/")
    if not base.endswith(config.INDEX_PATH):
        base += config.INDEX_PATH
    return base + path


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _http_request(url, body=None, headers=None, method="GET"):
    """Make one HTTP request and return the response body as text.
    Raises HTTPError for error statuses and TransportError for network,
    timeout, size and decoding problems."""
    data = body.encode("utf-8") if body else None
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    req = urllib.request.Request(url, data=data, headers=headers or {}, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        raise TransportError(
            f"[ERROR] Request timed out after {timeout} seconds. Is TestRail reachable?"
        ) from e
    except urllib.error.URLError as e:
        raise TransportError(f"[ERROR] Connection failed: {e.reason}") from e

    if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
        raise TransportError(
            f"[ERROR] Response too large from TestRail (>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
        )
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise TransportError("[ERROR] Unexpected response from TestRail (not UTF-8).") from None


def _describe_failure(error):
    """Human-readable description of a transport failure."""
    if isinstance(error, HTTPError):
        detail = _sanitize_error(error.body)
        return f"{error}: {detail}" if detail else str(error)
    return f"{type(error).__name__}: {error}"


def invoke(url, method, headers, body=None, *, events=None, transport=_http_request):
    """Send one request through *transport* and capture the outcome.

    Fires ``request_sent`` first, then ``response_received`` or
    ``operation_failed``. Never raises for transport faults.
    """
    notify(events, "request_sent", method, url, body)
    try:
        text = transport(url, body, headers, method)
        result = CallResult(True, text or "", status=200)
    except HTTPError as e:
        result = CallResult(False, _describe_failure(e), status=e.code, error=e)
    except Exception as e:
        result = CallResult(False, _describe_failure(e), error=e)

    if result.was_successful:
        notify(events, "response_received", result.value)
    else:
        notify(events, "operation_failed", f"HTTP RESPONSE: {result.value}")
    return result
