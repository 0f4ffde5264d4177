"""
Response classification, identifier extraction and payload merging.

TestRail only reports HTTP status reliably through the transport; when a
structured status is missing the failure description is scanned for a known
status code instead.
"""

from __future__ import annotations

import json
from http import HTTPStatus

from testrail_cli.exceptions import TransportError
from testrail_cli.results import CallResult, RequestResult

# Checked in this order; the first match wins.
_KNOWN_FAILURES = (
    ("400", HTTPStatus.BAD_REQUEST),
    ("401", HTTPStatus.UNAUTHORIZED),
    ("403", HTTPStatus.FORBIDDEN),
    ("404", HTTPStatus.NOT_FOUND),
    ("500", HTTPStatus.INTERNAL_SERVER_ERROR),
    ("502", HTTPStatus.BAD_GATEWAY),
    ("503", HTTPStatus.SERVICE_UNAVAILABLE),
    ("504", HTTPStatus.GATEWAY_TIMEOUT),
)
_KNOWN_STATUSES = {status.value: status for _, status in _KNOWN_FAILURES}


def status_from_description(description):
    """Return the first known status whose code appears in *description*, else None."""
    text = description or ""
    for needle, status in _KNOWN_FAILURES:
        if needle in text:
            return status
    return None


def failure_status(call_result: CallResult):
    """Classify a failed call: structured status first, description scan second.

    Local transport faults (timeouts, oversized or undecodable bodies) have no
    HTTP status and are never classified from the numbers in their message.
    """
    if call_result.status in _KNOWN_STATUSES:
        return _KNOWN_STATUSES[call_result.status]
    if call_result.status is None and isinstance(call_result.error, TransportError):
        return None
    return status_from_description(call_result.value)


def _load_body(text):
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        raise TransportError(
            "[ERROR] Unexpected response from TestRail (not valid JSON)."
        ) from None


def classify(
    call_result: CallResult, parse, *, many=False, collection_key=None
) -> RequestResult:
    """Turn a raw outcome into a RequestResult.

    Args:
        call_result: outcome of ``api.invoke``.
        parse: callable mapping one JSON object to the payload type.
        many: parse a JSON array (or paginated wrapper) into a list.
        collection_key: key of the list inside TestRail's paginated wrapper,
            e.g. ``"cases"``.

    Raises:
        The captured fault when the failure matches no known status.
    """
    if not call_result.was_successful:
        status = failure_status(call_result)
        if status is None:
            if call_result.error is not None:
                raise call_result.error
            raise TransportError(f"[ERROR] Unrecognized failure: {call_result.value}")
        error = call_result.error or TransportError(call_result.value)
        return RequestResult.failure(status, error)

    raw = call_result.value
    data = _load_body(raw)
    if many:
        if isinstance(data, dict) and collection_key:
            data = data.get(collection_key)
        items = data if isinstance(data, list) else []
        payload = [parse(item) for item in items if isinstance(item, dict)]
    else:
        payload = parse(data if isinstance(data, dict) else {})
    return RequestResult.success(payload, raw_json=raw)


def extract_id(body) -> int:
    """Pull the created/updated resource id out of a response body.

    Returns 0 when there is no usable id. A string id is TestRail's plan entry
    shape, where the real id lives at ``runs[0].id``.
    """
    try:
        data = json.loads(body) if isinstance(body, (str, bytes)) else body
        if not isinstance(data, dict):
            return 0
        token = data.get("id")
        if isinstance(token, str):
            token = data["runs"][0]["id"]
        if isinstance(token, bool) or not isinstance(token, int) or token < 0:
            return 0
        return token
    except (ValueError, TypeError, KeyError, IndexError):
        return 0


def merge_json(base, customs=None):
    """Merge caller-supplied custom fields into a payload. Caller keys win."""
    merged = dict(base or {})
    if customs:
        merged.update(customs)
    return merged
