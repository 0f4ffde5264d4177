"""Tests for responses.py — classification, id extraction, payload merging."""

from http import HTTPStatus

import pytest

from testrail_cli.exceptions import HTTPError, TransportError
from testrail_cli.models import Case
from testrail_cli.responses import (
    classify,
    extract_id,
    failure_status,
    merge_json,
    status_from_description,
)
from testrail_cli.results import CallResult


def _ok(body):
    return CallResult(True, body, status=200)


def _fail(description, status=None, error=None):
    return CallResult(False, description, status=status, error=error)


class TestStatusFromDescription:
    @pytest.mark.parametrize(
        "code,status",
        [
            ("400", HTTPStatus.BAD_REQUEST),
            ("401", HTTPStatus.UNAUTHORIZED),
            ("403", HTTPStatus.FORBIDDEN),
            ("404", HTTPStatus.NOT_FOUND),
            ("500", HTTPStatus.INTERNAL_SERVER_ERROR),
            ("502", HTTPStatus.BAD_GATEWAY),
            ("503", HTTPStatus.SERVICE_UNAVAILABLE),
            ("504", HTTPStatus.GATEWAY_TIMEOUT),
        ],
    )
    def test_known_codes(self, code, status):
        assert status_from_description(f"The remote server returned an error: ({code}).") == status

    def test_first_in_order_wins(self):
        assert status_from_description("Error 500 ... (404)") == HTTPStatus.NOT_FOUND

    def test_unknown(self):
        assert status_from_description("HTTP 999: Weird") is None
        assert status_from_description(None) is None


class TestFailureStatus:
    def test_structured_status_wins(self):
        # Body mentions 400 but the server said 404.
        result = _fail("HTTP 404: Not Found: case 400 missing", status=404)
        assert failure_status(result) == HTTPStatus.NOT_FOUND

    def test_falls_back_to_description(self):
        assert failure_status(_fail("gateway said 502")) == HTTPStatus.BAD_GATEWAY

    def test_unknown_structured_status_uses_description(self):
        assert failure_status(_fail("HTTP 429 and 503", status=429)) == (
            HTTPStatus.SERVICE_UNAVAILABLE
        )

    def test_transport_error_is_never_sniffed(self):
        err = TransportError("[ERROR] Response too large from TestRail (>5000000 bytes).")
        assert failure_status(_fail(f"TransportError: {err}", error=err)) is None


class TestClassifyFailure:
    def test_known_status(self):
        err = HTTPError(403, "Forbidden", "")
        result = classify(_fail("HTTP 403: Forbidden", 403, err), Case.from_json)
        assert result.ok is False
        assert result.status_code == HTTPStatus.FORBIDDEN
        assert result.error is err
        assert result.payload is None

    def test_error_synthesized_when_missing(self):
        result = classify(_fail("got (500) from server"), Case.from_json)
        assert result.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert isinstance(result.error, TransportError)

    def test_unrecognized_reraises_captured_error(self):
        err = HTTPError(999, "Weird", "")
        with pytest.raises(HTTPError) as exc_info:
            classify(_fail("HTTP 999: Weird", 999, err), Case.from_json)
        assert exc_info.value is err

    def test_unrecognized_without_error_raises_transport_error(self):
        with pytest.raises(TransportError, match="Unrecognized failure"):
            classify(_fail("something odd"), Case.from_json)

    def test_timeout_message_numbers_are_not_statuses(self):
        err = TransportError("[ERROR] Request timed out after 400 seconds.")
        with pytest.raises(TransportError) as exc_info:
            classify(_fail(f"TransportError: {err}", error=err), Case.from_json)
        assert exc_info.value is err


class TestClassifySuccess:
    def test_single(self):
        result = classify(_ok('{"id": 5, "title": "Login"}'), Case.from_json)
        assert result.ok is True
        assert result.status_code == HTTPStatus.OK
        assert result.error is None
        assert result.payload.id == 5
        assert result.payload.title == "Login"
        assert result.raw_json == '{"id": 5, "title": "Login"}'

    def test_many(self):
        result = classify(_ok('[{"id": 1}, {"id": 2}]'), Case.from_json, many=True)
        assert [c.id for c in result.payload] == [1, 2]

    def test_many_skips_non_objects(self):
        result = classify(_ok('[{"id": 1}, 7, null]'), Case.from_json, many=True)
        assert [c.id for c in result.payload] == [1]

    def test_paginated_wrapper(self):
        body = '{"offset": 0, "limit": 250, "size": 1, "_links": {}, "cases": [{"id": 10}]}'
        result = classify(_ok(body), Case.from_json, many=True, collection_key="cases")
        assert [c.id for c in result.payload] == [10]

    def test_wrapper_without_key_is_empty(self):
        result = classify(_ok('{"cases": [{"id": 10}]}'), Case.from_json, many=True)
        assert result.payload == []

    def test_empty_body_many(self):
        result = classify(_ok(""), Case.from_json, many=True)
        assert result.ok is True
        assert result.payload == []

    def test_empty_body_single(self):
        result = classify(_ok(""), Case.from_json)
        assert result.ok is True
        assert result.payload == Case()

    def test_malformed_body_raises(self):
        with pytest.raises(TransportError, match="not valid JSON"):
            classify(_ok("<html>login</html>"), Case.from_json)


class TestExtractId:
    def test_numeric_id(self):
        assert extract_id('{"id": 42}') == 42

    def test_string_id_uses_first_run(self):
        assert extract_id('{"id": "3933d74b-4282", "runs": [{"id": 77}, {"id": 78}]}') == 77

    def test_string_id_without_runs(self):
        assert extract_id('{"id": "3933d74b"}') == 0

    def test_string_id_with_empty_runs(self):
        assert extract_id('{"id": "3933d74b", "runs": []}') == 0

    def test_missing_id(self):
        assert extract_id('{"name": "x"}') == 0

    def test_empty_body(self):
        assert extract_id("") == 0

    def test_not_json(self):
        assert extract_id("nope") == 0

    def test_array_body(self):
        assert extract_id("[1, 2]") == 0

    def test_negative_or_bool_id(self):
        assert extract_id('{"id": -1}') == 0
        assert extract_id('{"id": true}') == 0

    def test_accepts_parsed_dict(self):
        assert extract_id({"id": 9}) == 9


class TestMergeJson:
    def test_customs_added(self):
        assert merge_json({"a": 1}, {"custom_x": 2}) == {"a": 1, "custom_x": 2}

    def test_caller_keys_win(self):
        assert merge_json({"title": "a"}, {"title": "b"}) == {"title": "b"}

    def test_none_is_noop(self):
        base = {"a": 1}
        merged = merge_json(base, None)
        assert merged == {"a": 1}
        assert merged is not base
