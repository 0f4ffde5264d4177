"""MCP server exposing TestRailClient methods as tools.

Package structure:
  __init__.py       — FastMCP init, register() calls, re-exports
  __main__.py       — ``python -m testrail_cli.mcp_server`` entry point
  _core.py          — Client caching, _call dispatcher, response contract
  _tools_read.py    — 11 listing tools
  _tools_write.py   — 4 mutation tools

Run: python -m testrail_cli.mcp_server
Requires: pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from testrail_cli.mcp_server import _tools_read, _tools_write

mcp = FastMCP(
    "testrail",
    instructions=(
        "TestRail test management tools. "
        "Results are recorded against test ids (list_tests), not case ids. "
        "close_run and close_plan cannot be undone.\n"
        "Every tool returns ok/schema_version; failures carry error_detail and, "
        "for server errors, the HTTP status."
    ),
)

for _mod in [_tools_read, _tools_write]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

# _core
from testrail_cli.mcp_server._core import (  # noqa: E402, F401
    MCP_RESPONSE_MODE,
    _call,
    _client,
    _contract_error,
    _finalize_tool_result,
    _get_client,
    _result_to_contract,
)

# _tools_read
from testrail_cli.mcp_server._tools_read import (  # noqa: E402, F401
    list_cases,
    list_milestones,
    list_plans,
    list_priorities,
    list_projects,
    list_results,
    list_runs,
    list_statuses,
    list_suites,
    list_tests,
    list_users,
)

# _tools_write
from testrail_cli.mcp_server._tools_write import (  # noqa: E402, F401
    add_result,
    add_run,
    close_plan,
    close_run,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
