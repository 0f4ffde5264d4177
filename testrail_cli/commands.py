"""
Command implementations for testrail-cli.
Each cmd_*() function receives an argparse.Namespace and handles one CLI command.

Business logic lives in client.py (TestRailClient). These thin wrappers
handle argparse → keyword args, result unwrapping, and formatter dispatch.
"""

from testrail_cli.api import _safe_json_parse, _sanitize_error
from testrail_cli.client import TestRailClient
from testrail_cli.exceptions import CliError, HTTPError
from testrail_cli.formatters import (
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
    mutation_response,
    output,
)
from testrail_cli.models import ResultStatus


def _client():
    return TestRailClient.from_config()


def _unwrap(result, what):
    """Return the payload of an OK result or raise CliError describing the failure."""
    if result.ok:
        return result.payload
    status = result.status_code
    error = result.error
    if isinstance(error, HTTPError) and error.body:
        detail = _sanitize_error(error.body)
    else:
        detail = str(error) if error else status.phrase
    if detail.startswith("[ERROR] "):
        detail = detail[len("[ERROR] ") :]
    raise CliError(f"[ERROR] Could not {what} ({status.value} {status.phrase}): {detail}")


def _parse_status(value):
    """Accept a status name (passed, failed, ...) or a numeric status id."""
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    try:
        return ResultStatus[text.upper()]
    except KeyError:
        names = ", ".join(s.name.lower() for s in ResultStatus)
        raise CliError(
            f"[ERROR] Unknown status '{value}'. Use a status id or one of: {names}"
        ) from None


def _parse_customs(text):
    """Parse a --custom JSON object of custom_* fields."""
    if not text:
        return None
    customs = _safe_json_parse(text, "--custom")
    if not isinstance(customs, dict):
        raise CliError("[ERROR] --custom must be a JSON object, e.g. {\"custom_env\": \"staging\"}")
    return customs


# ---------------------------------------------------------------------------
# Read commands
# ---------------------------------------------------------------------------


def cmd_projects(ns):
    output(_unwrap(_client().get_projects(), "get projects"), format_projects_table, ns.format)


def cmd_project(ns):
    project = _unwrap(_client().get_project(ns.project_id), f"get project {ns.project_id}")
    output(project, format_project_detail, ns.format)


def cmd_suites(ns):
    suites = _unwrap(_client().get_suites(ns.project_id), "get suites")
    output(suites, format_suites_table, ns.format)


def cmd_sections(ns):
    sections = _unwrap(_client().get_sections(ns.project_id, ns.suite), "get sections")
    output(sections, format_sections_table, ns.format)


def cmd_cases(ns):
    result = _client().get_cases(ns.project_id, ns.suite, ns.section)
    output(_unwrap(result, "get cases"), format_cases_table, ns.format)


def cmd_case(ns):
    case = _unwrap(_client().get_case(ns.case_id), f"get case {ns.case_id}")
    output(case, format_case_detail, ns.format)


def cmd_runs(ns):
    output(_unwrap(_client().get_runs(ns.project_id), "get runs"), format_runs_table, ns.format)


def cmd_run(ns):
    run = _unwrap(_client().get_run(ns.run_id), f"get run {ns.run_id}")
    output(run, format_run_detail, ns.format)


def cmd_tests(ns):
    output(_unwrap(_client().get_tests(ns.run_id), "get tests"), format_tests_table, ns.format)


def cmd_plans(ns):
    output(_unwrap(_client().get_plans(ns.project_id), "get plans"), format_plans_table, ns.format)


def cmd_plan(ns):
    plan = _unwrap(_client().get_plan(ns.plan_id), f"get plan {ns.plan_id}")
    output(plan, format_plan_detail, ns.format)


def cmd_milestones(ns):
    milestones = _unwrap(_client().get_milestones(ns.project_id), "get milestones")
    output(milestones, format_milestones_table, ns.format)


def cmd_users(ns):
    output(_unwrap(_client().get_users(), "get users"), format_users_table, ns.format)


def cmd_user(ns):
    user = _unwrap(_client().get_user_by_email(ns.email), f"find user {ns.email}")
    output(user, format_user_detail, ns.format)


def cmd_statuses(ns):
    output(_unwrap(_client().get_statuses(), "get statuses"), format_statuses_table, ns.format)


def cmd_priorities(ns):
    priorities = _unwrap(_client().get_priorities(), "get priorities")
    output(priorities, format_priorities_table, ns.format)


def cmd_results(ns):
    results = _unwrap(_client().get_results(ns.test_id, limit=ns.limit), "get results")
    output(results, format_results_table, ns.format)


# ---------------------------------------------------------------------------
# Mutation commands
# ---------------------------------------------------------------------------


def cmd_add_result(ns):
    status = _parse_status(ns.status)
    result = _client().add_result(
        ns.test_id,
        status=status,
        comment=ns.comment,
        version=ns.build,
        defects=ns.defects,
        customs=_parse_customs(ns.custom),
    )
    added = _unwrap(result, f"add result to test {ns.test_id}")
    label = status.name.lower() if isinstance(status, ResultStatus) else f"status {status}"
    mutation_response("Added result", added.id, f"test {ns.test_id}: {label}", ns.format)


def cmd_add_run(ns):
    result = _client().add_run(
        ns.project_id,
        ns.suite,
        ns.name,
        description=ns.description,
        milestone_id=ns.milestone,
        case_ids=set(ns.case) if ns.case else None,
        customs=_parse_customs(ns.custom),
    )
    run = _unwrap(result, "add run")
    scope = f"{len(ns.case)} case(s)" if ns.case else "all cases"
    mutation_response("Created run", run.id, f"{run.name or ns.name} ({scope})", ns.format)


def cmd_close_run(ns):
    _unwrap(_client().close_run(ns.run_id), f"close run {ns.run_id}")
    mutation_response("Closed run", ns.run_id, fmt=ns.format)


def cmd_close_plan(ns):
    _unwrap(_client().close_plan(ns.plan_id), f"close plan {ns.plan_id}")
    mutation_response("Closed plan", ns.plan_id, fmt=ns.format)


def cmd_delete_run(ns):
    result = _client().delete_run(ns.run_id)
    if not result.succeeded:
        raise CliError(f"[ERROR] Could not delete run {ns.run_id}: {result.error}")
    mutation_response("Deleted run", ns.run_id, fmt=ns.format)
