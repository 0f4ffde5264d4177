"""Write tools: results, runs and closing (4 tools)."""

from __future__ import annotations

from testrail_cli._utils import _parse_elapsed
from testrail_cli.mcp_server._core import _call, _contract_error, _finalize_tool_result
from testrail_cli.models import ResultStatus


def _resolve_status(status):
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    text = str(status).strip()
    if text.isdigit():
        return int(text)
    try:
        return ResultStatus[text.upper()]
    except KeyError:
        return None


def add_result(
    test_id: int,
    status: str | int,
    comment: str | None = None,
    version: str | None = None,
    elapsed: str | None = None,
    defects: str | None = None,
    customs: dict | None = None,
) -> dict:
    """Record a result for a test of a run.

    Args:
        test_id: Test id (from list_tests), not the case id.
        status: passed, blocked, untested, retest, failed, or a numeric status id.
        comment: Result comment.
        version: Version or build tested against.
        elapsed: Time spent, e.g. "1m 30s".
        defects: Comma-separated defect ids.
        customs: custom_* result fields.

    Returns:
        Dict with data: the created result.
    """
    status_id = _resolve_status(status)
    if status_id is None:
        return _finalize_tool_result(_contract_error(f"Unknown status: {status!r}", "error"))
    return _finalize_tool_result(
        _call(
            "add_result",
            test_id=test_id,
            status=status_id,
            comment=comment,
            version=version,
            elapsed=_parse_elapsed(elapsed) if elapsed else None,
            defects=defects,
            customs=customs,
        )
    )


def add_run(
    project_id: int,
    suite_id: int,
    name: str,
    description: str | None = None,
    milestone_id: int | None = None,
    case_ids: list[int] | None = None,
) -> dict:
    """Create a test run.

    Without case_ids the run includes every case of the suite. With case_ids
    at least one id must exist in the suite, otherwise nothing is created
    and a 400 error is returned.
    """
    return _finalize_tool_result(
        _call(
            "add_run",
            project_id=project_id,
            suite_id=suite_id,
            name=name,
            description=description,
            milestone_id=milestone_id,
            case_ids=set(case_ids) if case_ids else None,
        )
    )


def close_run(run_id: int) -> dict:
    """Close a run. Closed runs cannot be edited or reopened."""
    return _finalize_tool_result(_call("close_run", run_id=run_id))


def close_plan(plan_id: int) -> dict:
    """Close a plan and all its runs. Cannot be undone."""
    return _finalize_tool_result(_call("close_plan", plan_id=plan_id))


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(add_result)
    mcp.tool()(add_run)
    mcp.tool()(close_run)
    mcp.tool()(close_plan)
