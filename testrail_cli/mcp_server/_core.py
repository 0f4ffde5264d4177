"""Core helpers: client caching, _call dispatcher, response contract."""

from __future__ import annotations

from testrail_cli import CliError, SetupError, TestRailClient
from testrail_cli.config import CONTRACT_SCHEMA_VERSION, MCP_RESPONSE_MODE
from testrail_cli.formatters import to_jsonable
from testrail_cli.results import MutationResult, RequestResult

_client: TestRailClient | None = None


def _get_client() -> TestRailClient:
    """Return a cached TestRailClient, creating one on first use."""
    global _client
    if _client is None:
        _client = TestRailClient.from_config()
    return _client


def _contract_error(message: str, error_type: str = "error", status: int | None = None) -> dict:
    """Return a stable MCP error envelope with legacy compatibility fields."""
    out = {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,  # legacy
        "error": message,  # legacy
        "error_detail": {
            "type": error_type,
            "message": message,
        },
    }
    if status is not None:
        out["status"] = status
    return out


def _result_to_contract(result) -> dict:
    """Map a RequestResult/MutationResult onto the tool response contract."""
    if isinstance(result, MutationResult):
        if not result.succeeded:
            return _contract_error(str(result.error or "Request failed"), "http")
        return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": {"id": result.value}}
    if not result.ok:
        status = result.status_code
        message = str(result.error) if result.error else status.phrase
        return _contract_error(message, "http", status.value)
    return {
        "ok": True,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "status": result.status_code.value,
        "data": to_jsonable(result.payload),
    }


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): contract dict as built, including ``status``.
        - envelope: success is always exactly {"ok", "schema_version", "data"}.
    """
    if not isinstance(result, dict):
        result = {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": result}
    if result.get("ok") is False or MCP_RESPONSE_MODE != "envelope":
        return result
    return {
        "ok": True,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "data": result.get("data"),
    }


_ALLOWED_METHODS = {
    "get_projects",
    "get_suites",
    "get_cases",
    "get_runs",
    "get_plans",
    "get_tests",
    "get_results",
    "get_results_for_run",
    "get_milestones",
    "get_users",
    "get_statuses",
    "get_priorities",
    "add_result",
    "add_run",
    "close_run",
    "close_plan",
}


def _call(method_name: str, **kwargs) -> dict:
    """Call a TestRailClient method, converting results and exceptions to contract dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        result = getattr(client, method_name)(**kwargs)
    except SetupError as e:
        return _contract_error(str(e), "setup")
    except CliError as e:
        return _contract_error(str(e), "error")
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
    if isinstance(result, (RequestResult, MutationResult)):
        return _result_to_contract(result)
    return result
