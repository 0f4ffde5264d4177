"""Table formatters for TestRail records.

Each formatter accepts the payload of a client call: a list of records
(or a single record for the detail views).
"""

from testrail_cli._utils import _format_elapsed
from testrail_cli.formatters._table import _table, _trunc
from testrail_cli.models import ResultStatus


def _status_label(status_id):
    if status_id is None:
        return None
    try:
        return ResultStatus(status_id).name.lower()
    except ValueError:
        return str(status_id)


def format_projects_table(projects):
    """Format projects as a readable table."""
    if not projects:
        return "No projects found."
    cols = [("ID", 6), ("Name", 40), ("Mode", 5), ("Done", 0)]
    rows = [(p.id, _trunc(p.name, 40), p.suite_mode, p.is_completed) for p in projects]
    return _table(cols, rows, f"Total: {len(projects)} projects")


def format_project_detail(project):
    lines = [f"Project: {project.name}"]
    lines.append(f"  ID:        {project.id}")
    lines.append(f"  Completed: {'yes' if project.is_completed else 'no'}")
    if project.announcement:
        lines.append(f"  Announcement: {project.announcement}")
    if project.url:
        lines.append(f"  URL:       {project.url}")
    return "\n".join(lines)


def format_suites_table(suites):
    if not suites:
        return "No suites found."
    cols = [("ID", 6), ("Name", 40), ("Master", 7), ("Done", 0)]
    rows = [(s.id, _trunc(s.name, 40), s.is_master, s.is_completed) for s in suites]
    return _table(cols, rows, f"Total: {len(suites)} suites")


def format_sections_table(sections):
    """Format sections, indented by depth."""
    if not sections:
        return "No sections found."
    cols = [("ID", 6), ("Parent", 7), ("Name", 0)]
    rows = []
    for s in sections:
        indent = "  " * (s.depth or 0)
        rows.append((s.id, s.parent_id, _trunc(f"{indent}{s.name or ''}", 60)))
    return _table(cols, rows, f"Total: {len(sections)} sections")


def format_cases_table(cases):
    if not cases:
        return "No cases found."
    cols = [("ID", 8), ("Section", 8), ("Pri", 4), ("Refs", 12), ("Title", 0)]
    rows = [
        (c.id, c.section_id, c.priority_id, _trunc(c.refs, 12), _trunc(c.title, 60)) for c in cases
    ]
    return _table(cols, rows, f"Total: {len(cases)} cases")


def format_case_detail(case):
    """Format a single case with its custom fields."""
    lines = [f"Case C{case.id}: {case.title}"]
    lines.append(f"  Section:  {case.section_id}")
    lines.append(f"  Suite:    {case.suite_id}")
    lines.append(f"  Type:     {case.type_id}")
    lines.append(f"  Priority: {case.priority_id}")
    if case.refs:
        lines.append(f"  Refs:     {case.refs}")
    if case.estimate:
        lines.append(f"  Estimate: {case.estimate}")
    for key, value in sorted((case.customs or {}).items()):
        if value not in (None, ""):
            lines.append(f"  {key}: {_trunc(str(value), 200)}")
    return "\n".join(lines)


def format_runs_table(runs):
    """Format runs with pass/fail counts."""
    if not runs:
        return "No runs found."
    cols = [("ID", 6), ("Suite", 6), ("Pass", 5), ("Fail", 5), ("Done", 5), ("Name", 0)]
    rows = [
        (r.id, r.suite_id, r.passed_count, r.failed_count, r.is_completed, _trunc(r.name, 50))
        for r in runs
    ]
    return _table(cols, rows, f"Total: {len(runs)} runs")


def format_run_detail(run):
    lines = [f"Run R{run.id}: {run.name}"]
    lines.append(f"  Project:  {run.project_id}")
    lines.append(f"  Suite:    {run.suite_id}")
    lines.append(f"  All cases: {'yes' if run.include_all else 'no'}")
    lines.append(
        f"  Passed {run.passed_count or 0}  Failed {run.failed_count or 0}  "
        f"Blocked {run.blocked_count or 0}  Retest {run.retest_count or 0}  "
        f"Untested {run.untested_count or 0}"
    )
    if run.plan_id:
        lines.append(f"  Plan:     {run.plan_id}")
    if run.url:
        lines.append(f"  URL:      {run.url}")
    return "\n".join(lines)


def format_tests_table(tests):
    if not tests:
        return "No tests found."
    cols = [("ID", 8), ("Case", 8), ("Status", 10), ("Title", 0)]
    rows = [(t.id, t.case_id, _status_label(t.status_id), _trunc(t.title, 60)) for t in tests]
    return _table(cols, rows, f"Total: {len(tests)} tests")


def format_plans_table(plans):
    if not plans:
        return "No plans found."
    cols = [("ID", 6), ("Pass", 5), ("Fail", 5), ("Done", 5), ("Name", 0)]
    rows = [
        (p.id, p.passed_count, p.failed_count, p.is_completed, _trunc(p.name, 50)) for p in plans
    ]
    return _table(cols, rows, f"Total: {len(plans)} plans")


def format_plan_detail(plan):
    """Format a plan with its entries and their runs."""
    lines = [f"Plan {plan.id}: {plan.name}"]
    lines.append(f"  Completed: {'yes' if plan.is_completed else 'no'}")
    if not plan.entries:
        lines.append("  (no entries)")
    for entry in plan.entries:
        lines.append(f"  Entry {entry.id}  suite {entry.suite_id}: {entry.name}")
        for run in entry.runs:
            lines.append(f"    Run R{run.id}: {run.name}")
    return "\n".join(lines)


def format_milestones_table(milestones):
    if not milestones:
        return "No milestones found."
    cols = [("ID", 6), ("Due", 12), ("Done", 5), ("Name", 0)]
    rows = [
        (m.id, m.due_on.date().isoformat() if m.due_on else None, m.is_completed, m.name)
        for m in milestones
    ]
    return _table(cols, rows, f"Total: {len(milestones)} milestones")


def format_users_table(users):
    if not users:
        return "No users found."
    cols = [("ID", 6), ("Name", 28), ("Active", 7), ("Email", 0)]
    rows = [(u.id, _trunc(u.name, 28), u.is_active, u.email) for u in users]
    return _table(cols, rows, f"Total: {len(users)} users")


def format_user_detail(user):
    return f"User {user.id}: {user.name} <{user.email}>"


def format_statuses_table(statuses):
    if not statuses:
        return "No statuses found."
    cols = [("ID", 4), ("Name", 16), ("Final", 6), ("Label", 0)]
    rows = [(s.id, s.name, s.is_final, s.label) for s in statuses]
    return _table(cols, rows)


def format_priorities_table(priorities):
    if not priorities:
        return "No priorities found."
    cols = [("ID", 4), ("Level", 6), ("Short", 10), ("Name", 0)]
    rows = [(p.id, p.priority, p.short_name, p.name) for p in priorities]
    return _table(cols, rows)


def format_results_table(results):
    """Format results, latest first as returned by TestRail."""
    if not results:
        return "No results found."
    cols = [("ID", 8), ("Status", 10), ("Elapsed", 9), ("Comment", 0)]
    rows = []
    for r in results:
        elapsed = _format_elapsed(r.elapsed) if r.elapsed is not None else None
        comment = (r.comment or "").replace("\n", " ")
        rows.append((r.id, _status_label(r.status_id), elapsed, _trunc(comment, 60)))
    return _table(cols, rows, f"Total: {len(results)} results")
