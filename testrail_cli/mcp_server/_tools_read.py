"""Read tools: projects, suites, cases, runs, plans, tests and lookups (11 tools)."""

from __future__ import annotations

from testrail_cli.mcp_server._core import _call, _contract_error, _finalize_tool_result


def list_projects() -> dict:
    """List all projects of the TestRail instance.

    Returns:
        Dict with ok, status and data (list of projects with id, name,
        suite_mode, is_completed, url).
    """
    return _finalize_tool_result(_call("get_projects"))


def list_suites(project_id: int) -> dict:
    """List the test suites of a project."""
    return _finalize_tool_result(_call("get_suites", project_id=project_id))


def list_cases(project_id: int, suite_id: int, section_id: int | None = None) -> dict:
    """List test cases of a project's suite.

    Args:
        project_id: Project id.
        suite_id: Suite id (single-suite projects still have one).
        section_id: Only return cases of this section.

    Returns:
        Dict with data: list of cases including custom_* fields.
    """
    return _finalize_tool_result(
        _call("get_cases", project_id=project_id, suite_id=suite_id, section_id=section_id)
    )


def list_runs(project_id: int) -> dict:
    """List test runs of a project with their pass/fail counts."""
    return _finalize_tool_result(_call("get_runs", project_id=project_id))


def list_plans(project_id: int) -> dict:
    """List test plans of a project."""
    return _finalize_tool_result(_call("get_plans", project_id=project_id))


def list_tests(run_id: int) -> dict:
    """List the tests (case instances) of a run. Use test ids with add_result."""
    return _finalize_tool_result(_call("get_tests", run_id=run_id))


def list_results(
    test_id: int | None = None, run_id: int | None = None, limit: int | None = None
) -> dict:
    """List results, latest first.

    Args:
        test_id: Results of one test.
        run_id: Results of a whole run (used when test_id is not given).
        limit: Return at most this many results.
    """
    if test_id is not None:
        return _finalize_tool_result(_call("get_results", test_id=test_id, limit=limit))
    if run_id is not None:
        return _finalize_tool_result(_call("get_results_for_run", run_id=run_id, limit=limit))
    return _finalize_tool_result(_contract_error("Provide test_id or run_id.", "error"))


def list_milestones(project_id: int) -> dict:
    """List milestones of a project."""
    return _finalize_tool_result(_call("get_milestones", project_id=project_id))


def list_users() -> dict:
    """List users (id, name, email, is_active)."""
    return _finalize_tool_result(_call("get_users"))


def list_statuses() -> dict:
    """List result statuses, including custom ones. Status ids feed add_result."""
    return _finalize_tool_result(_call("get_statuses"))


def list_priorities() -> dict:
    """List case priorities with their levels (higher = more important)."""
    return _finalize_tool_result(_call("get_priorities"))


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(list_projects)
    mcp.tool()(list_suites)
    mcp.tool()(list_cases)
    mcp.tool()(list_runs)
    mcp.tool()(list_plans)
    mcp.tool()(list_tests)
    mcp.tool()(list_results)
    mcp.tool()(list_milestones)
    mcp.tool()(list_users)
    mcp.tool()(list_statuses)
    mcp.tool()(list_priorities)
