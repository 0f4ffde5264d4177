"""Output formatting package for testrail-cli.

Re-exports all public names so consumers can do:
    from testrail_cli.formatters import format_runs_table
"""

from testrail_cli.formatters._core import (
    mutation_response,
    output,
    pretty_print,
    to_jsonable,
)
from testrail_cli.formatters._entities import (
    format_case_detail,
    format_cases_table,
    format_milestones_table,
    format_plan_detail,
    format_plans_table,
    format_priorities_table,
    format_project_detail,
    format_projects_table,
    format_results_table,
    format_run_detail,
    format_runs_table,
    format_sections_table,
    format_statuses_table,
    format_suites_table,
    format_tests_table,
    format_user_detail,
    format_users_table,
)
from testrail_cli.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_case_detail",
    "format_cases_table",
    "format_milestones_table",
    "format_plan_detail",
    "format_plans_table",
    "format_priorities_table",
    "format_project_detail",
    "format_projects_table",
    "format_results_table",
    "format_run_detail",
    "format_runs_table",
    "format_sections_table",
    "format_statuses_table",
    "format_suites_table",
    "format_tests_table",
    "format_user_detail",
    "format_users_table",
    "mutation_response",
    "output",
    "pretty_print",
    "to_jsonable",
]
