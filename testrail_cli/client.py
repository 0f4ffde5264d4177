"""
TestRailClient — public Python API for the TestRail v2 HTTP API.

Single entry point for programmatic use, the CLI and the MCP server.
Every read/add/update/close method returns a RequestResult and every
delete_* method returns a MutationResult; expected remote failures are
reported through the result's status instead of being raised.
"""

from __future__ import annotations

import json
from http import HTTPStatus

from testrail_cli import api, config
from testrail_cli._utils import _is_blank
from testrail_cli.cache import LazyValue
from testrail_cli.events import ClientEvents, HttpLogEvents, notify
from testrail_cli.exceptions import CliError, SetupError, TransportError
from testrail_cli.models import (
    Case,
    CaseField,
    CaseType,
    ConfigurationGroup,
    Milestone,
    Plan,
    PlanEntry,
    Priority,
    Project,
    Result,
    Run,
    Section,
    Status,
    Suite,
    Test,
    User,
)
from testrail_cli.responses import classify, extract_id, merge_json
from testrail_cli.results import CallResult, MutationResult, RequestResult
from testrail_cli.uri import CommandAction, CommandType, build_uri, query_options

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _bad_request(message: str) -> RequestResult:
    """Local precondition failure; no request is sent."""
    return RequestResult.failure(HTTPStatus.BAD_REQUEST, CliError(f"[ERROR] {message}"))


def _required(value, name):
    if _is_blank(value):
        return _bad_request(f"'{name}' must be a non-empty string.")
    return None


class _LookupFailed(Exception):
    """A cache fetch came back non-OK; keeps the cell unrealized."""

    def __init__(self, result):
        super().__init__(str(result.error))
        self.result = result


def _any_case_in(cases, candidates) -> bool:
    return any(c.id is not None and c.id in candidates for c in cases or [])


class TestRailClient:
    """Client for one TestRail instance.

    Holds the endpoint, a precomputed basic-auth header and two lazily
    realized caches (project list, priority levels). Everything else is
    fetched live.
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        *,
        events: ClientEvents | None = None,
        transport=None,
    ):
        """
        Args:
            url: Instance URL, e.g. ``https://example.testrail.io``.
            username: Login email.
            password: Password or API key.
            events: Observer for request/response/failure notifications.
                Defaults to HttpLogEvents.
            transport: Callable ``(url, body, headers, method) -> str``.
                Defaults to ``api._http_request``.
        """
        if _is_blank(url):
            raise SetupError("[SETUP_NEEDED] TestRail URL is empty.")
        self.url = url.rstrip("/")
        self._auth = api.basic_auth(username, password)
        self.events = events if events is not None else HttpLogEvents()
        self._transport = transport
        self._projects: LazyValue[list[Project]] = LazyValue(self._load_projects)
        self._priority_levels: LazyValue[dict[int, int]] = LazyValue(self._load_priority_levels)

    @classmethod
    def from_config(cls, **kwargs) -> TestRailClient:
        """Build a client from TESTRAIL_URL / TESTRAIL_USER / TESTRAIL_PASSWORD."""
        if not config.BASE_URL or not config.USERNAME or not config.PASSWORD:
            raise SetupError(
                "[SETUP_NEEDED] TestRail is not configured.\n"
                "  Set TESTRAIL_URL, TESTRAIL_USER and TESTRAIL_PASSWORD in .env "
                "or the environment."
            )
        return cls(config.BASE_URL, config.USERNAME, config.PASSWORD, **kwargs)

    # -------------------------------------------------------------------
    # Engine
    # -------------------------------------------------------------------

    def _call_endpoint(self, uri: str, method: str, payload: dict | None = None) -> CallResult:
        body = json.dumps(payload) if payload is not None else None
        return api.invoke(
            api.api_url(self.url, uri),
            method,
            api.build_headers(self._auth),
            body,
            events=self.events,
            transport=self._transport or api._http_request,
        )

    def _send_get(self, uri, parse, *, many=False, key=None) -> RequestResult:
        return classify(self._call_endpoint(uri, "GET"), parse, many=many, collection_key=key)

    def _send_post(self, uri, parse, payload=None, *, many=False) -> RequestResult:
        return classify(self._call_endpoint(uri, "POST", payload), parse, many=many)

    def _send_command(self, uri: str, payload: dict | None = None) -> MutationResult:
        """POST a command whose only interesting output is the affected id."""
        result = self._call_endpoint(uri, "POST", payload)
        if not result.was_successful:
            return MutationResult(False, 0, result.error or TransportError(result.value))
        return MutationResult(True, extract_id(result.value))

    # -------------------------------------------------------------------
    # Caches and validation
    # -------------------------------------------------------------------

    @property
    def projects(self) -> list[Project]:
        """All projects, fetched on first access and kept for the client's lifetime.

        A failed fetch yields an empty list and is not cached.
        """
        try:
            return self._projects.get()
        except _LookupFailed:
            return []

    def refresh_caches(self) -> None:
        """Drop the project and priority caches; the next access refetches."""
        self._projects.reset()
        self._priority_levels.reset()

    def _load_projects(self) -> list[Project]:
        result = self.get_projects()
        if not result.ok:
            raise _LookupFailed(result)
        return list(result.payload or [])

    def _load_priority_levels(self) -> dict[int, int]:
        result = self.get_priorities()
        if not result.ok:
            raise _LookupFailed(result)
        levels = {}
        for priority in result.payload or []:
            if priority is None or priority.id is None or not isinstance(priority.priority, int):
                continue
            levels[priority.id] = priority.priority
        return levels

    def get_priority_for_case(self, case: Case | None) -> int | None:
        """Priority level of a case (higher = more important), or None if unknown.

        None is also returned when the priorities cannot be fetched; the next
        call tries again.
        """
        if case is None or case.priority_id is None:
            return None
        try:
            levels = self._priority_levels.get()
        except _LookupFailed:
            return None
        return levels.get(case.priority_id)

    def has_any_case_in_suite(self, project_id: int, suite_id: int, case_ids) -> bool:
        """True if at least one of *case_ids* is a live case of the project/suite."""
        candidates = set(case_ids or ())
        if not candidates:
            return False
        return _any_case_in(self.get_cases(project_id, suite_id).payload, candidates)

    def _check_case_selection(self, project_id, suite_id, case_ids) -> RequestResult | None:
        """Failure result for a case selection, or None when it may be used.

        A failed case lookup is returned as-is so auth and server errors are
        not reported as unknown case ids.
        """
        lookup = self.get_cases(project_id, suite_id)
        if not lookup.ok:
            return lookup
        if not _any_case_in(lookup.payload, set(case_ids)):
            return _bad_request("Case ids not found in the suite.")
        return None

    # -------------------------------------------------------------------
    # Add commands
    # -------------------------------------------------------------------

    def add_result(
        self,
        test_id: int,
        status=None,
        comment: str | None = None,
        version: str | None = None,
        elapsed=None,
        defects: str | None = None,
        assigned_to_id: int | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Result]:
        """Add a result, comment or assignment to a test.

        Args:
            test_id: The test the result belongs to.
            status: ResultStatus or raw status id.
            comment: Comment / description for the result.
            version: Version or build tested against.
            elapsed: timedelta spent executing the test.
            defects: Comma-separated defect ids.
            assigned_to_id: User the test should be assigned to.
            customs: ``custom_*`` fields; override typed fields on collision.
        """
        uri = build_uri(CommandType.ADD, CommandAction.RESULT, test_id)
        result = Result(
            test_id=test_id,
            status_id=int(status) if status is not None else None,
            comment=comment,
            version=version,
            elapsed=elapsed,
            defects=defects,
            assignedto_id=assigned_to_id,
        )
        return self._send_post(uri, Result.from_json, merge_json(result.to_json(), customs))

    def add_result_for_case(
        self,
        run_id: int,
        case_id: int,
        status=None,
        comment: str | None = None,
        version: str | None = None,
        elapsed=None,
        defects: str | None = None,
        assigned_to_id: int | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Result]:
        """Add a result for a case within a run (same fields as add_result)."""
        uri = build_uri(CommandType.ADD, CommandAction.RESULT_FOR_CASE, run_id, case_id)
        result = Result(
            status_id=int(status) if status is not None else None,
            comment=comment,
            version=version,
            elapsed=elapsed,
            defects=defects,
            assignedto_id=assigned_to_id,
        )
        return self._send_post(uri, Result.from_json, merge_json(result.to_json(), customs))

    def add_results_for_cases(self, run_id: int, results: list[Result]) -> RequestResult[list]:
        """Add several results in one request. Each Result must carry a case_id."""
        uri = build_uri(CommandType.ADD, CommandAction.RESULTS_FOR_CASES, run_id)
        if not results:
            return _bad_request("'results' must contain at least one result.")
        if any(r.case_id is None for r in results):
            return _bad_request("Every result needs a case_id.")
        payload = {"results": [r.to_json() for r in results]}
        return self._send_post(uri, Result.from_json, payload, many=True)

    def add_run(
        self,
        project_id: int,
        suite_id: int,
        name: str,
        description: str | None = None,
        milestone_id: int | None = None,
        assigned_to_id: int | None = None,
        case_ids=None,
        customs: dict | None = None,
    ) -> RequestResult[Run]:
        """Create a test run.

        With *case_ids* the run uses a custom case selection, but only if at
        least one of the ids exists in the suite; otherwise a local
        BAD_REQUEST result is returned and nothing is created. Without
        *case_ids* the run includes every case of the suite.
        """
        include_all = True
        if case_ids:
            failure = self._check_case_selection(project_id, suite_id, case_ids)
            if failure is not None:
                return failure
            include_all = False

        uri = build_uri(CommandType.ADD, CommandAction.RUN, project_id)
        run = Run(
            suite_id=suite_id,
            name=name,
            description=description,
            milestone_id=milestone_id,
            assignedto_id=assigned_to_id,
            include_all=include_all,
            case_ids=sorted(case_ids) if case_ids else None,
        )
        return self._send_post(uri, Run.from_json, merge_json(run.to_json(), customs))

    def add_case(
        self,
        section_id: int,
        title: str,
        type_id: int | None = None,
        priority_id: int | None = None,
        estimate: str | None = None,
        milestone_id: int | None = None,
        refs: str | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Case]:
        """Create a test case in a section. *title* is required."""
        failure = _required(title, "title")
        if failure:
            return failure
        uri = build_uri(CommandType.ADD, CommandAction.CASE, section_id)
        case = Case(
            title=title,
            type_id=type_id,
            priority_id=priority_id,
            estimate=estimate,
            milestone_id=milestone_id,
            refs=refs,
        )
        return self._send_post(uri, Case.from_json, merge_json(case.to_json(), customs))

    def add_project(
        self,
        name: str,
        announcement: str | None = None,
        show_announcement: bool | None = None,
        suite_mode=None,
    ) -> RequestResult[Project]:
        """Create a project (admin only)."""
        failure = _required(name, "name")
        if failure:
            return failure
        uri = build_uri(CommandType.ADD, CommandAction.PROJECT)
        project = Project(
            name=name,
            announcement=announcement,
            show_announcement=show_announcement,
            suite_mode=int(suite_mode) if suite_mode is not None else None,
        )
        return self._send_post(uri, Project.from_json, project.to_json())

    def add_section(
        self,
        project_id: int,
        suite_id: int,
        name: str,
        parent_id: int | None = None,
        description: str | None = None,
    ) -> RequestResult[Section]:
        failure = _required(name, "name")
        if failure:
            return failure
        uri = build_uri(CommandType.ADD, CommandAction.SECTION, project_id)
        section = Section(
            suite_id=suite_id, parent_id=parent_id, name=name, description=description
        )
        return self._send_post(uri, Section.from_json, section.to_json())

    def add_suite(
        self, project_id: int, name: str, description: str | None = None
    ) -> RequestResult[Suite]:
        failure = _required(name, "name")
        if failure:
            return failure
        uri = build_uri(CommandType.ADD, CommandAction.SUITE, project_id)
        suite = Suite(name=name, description=description)
        return self._send_post(uri, Suite.from_json, suite.to_json())

    def add_plan(
        self,
        project_id: int,
        name: str,
        description: str | None = None,
        milestone_id: int | None = None,
        entries: list[PlanEntry] | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Plan]:
        """Create a test plan, optionally with entries (groups of runs)."""
        failure = _required(name, "name")
        if failure:
            return failure
        uri = build_uri(CommandType.ADD, CommandAction.PLAN, project_id)
        plan = Plan(
            name=name,
            description=description,
            milestone_id=milestone_id,
            entries=list(entries or []),
        )
        return self._send_post(uri, Plan.from_json, merge_json(plan.to_json(), customs))

    def add_plan_entry(
        self,
        plan_id: int,
        suite_id: int,
        name: str | None = None,
        assigned_to_id: int | None = None,
        case_ids=None,
        customs: dict | None = None,
    ) -> RequestResult[PlanEntry]:
        """Add one or more runs to a plan. *case_ids* switches to a custom selection."""
        uri = build_uri(CommandType.ADD, CommandAction.PLAN_ENTRY, plan_id)
        entry = PlanEntry(
            suite_id=suite_id,
            name=name,
            assignedto_id=assigned_to_id,
            include_all=None if case_ids is None else not case_ids,
            case_ids=sorted(case_ids) if case_ids else None,
        )
        return self._send_post(uri, PlanEntry.from_json, merge_json(entry.to_json(), customs))

    def add_milestone(
        self,
        project_id: int,
        name: str,
        description: str | None = None,
        parent_id: int | None = None,
        due_on=None,
    ) -> RequestResult[Milestone]:
        failure = _required(name, "name")
        if failure:
            return failure
        uri = build_uri(CommandType.ADD, CommandAction.MILESTONE, project_id)
        milestone = Milestone(
            name=name, description=description, parent_id=parent_id, due_on=due_on
        )
        return self._send_post(uri, Milestone.from_json, milestone.to_json())

    # -------------------------------------------------------------------
    # Update commands
    # -------------------------------------------------------------------

    def update_case(
        self,
        case_id: int,
        title: str,
        type_id: int | None = None,
        priority_id: int | None = None,
        estimate: str | None = None,
        milestone_id: int | None = None,
        refs: str | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Case]:
        """Partially update a case. *title* is required."""
        failure = _required(title, "title")
        if failure:
            return failure
        uri = build_uri(CommandType.UPDATE, CommandAction.CASE, case_id)
        case = Case(
            title=title,
            type_id=type_id,
            priority_id=priority_id,
            estimate=estimate,
            milestone_id=milestone_id,
            refs=refs,
        )
        return self._send_post(uri, Case.from_json, merge_json(case.to_json(), customs))

    def update_milestone(
        self,
        milestone_id: int,
        name: str | None = None,
        description: str | None = None,
        due_on=None,
        is_completed: bool | None = None,
    ) -> RequestResult[Milestone]:
        uri = build_uri(CommandType.UPDATE, CommandAction.MILESTONE, milestone_id)
        milestone = Milestone(
            name=name, description=description, due_on=due_on, is_completed=is_completed
        )
        return self._send_post(uri, Milestone.from_json, milestone.to_json())

    def update_plan(
        self,
        plan_id: int,
        name: str | None = None,
        description: str | None = None,
        milestone_id: int | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Plan]:
        uri = build_uri(CommandType.UPDATE, CommandAction.PLAN, plan_id)
        plan = Plan(name=name, description=description, milestone_id=milestone_id)
        return self._send_post(uri, Plan.from_json, merge_json(plan.to_json(), customs))

    def update_plan_entry(
        self,
        plan_id: int,
        entry_id: str,
        name: str | None = None,
        assigned_to_id: int | None = None,
        case_ids=None,
        customs: dict | None = None,
    ) -> RequestResult[PlanEntry]:
        """Update the runs of a plan entry. *entry_id* is the entry GUID, not a run id."""
        uri = build_uri(CommandType.UPDATE, CommandAction.PLAN_ENTRY, plan_id, id2_str=entry_id)
        entry = PlanEntry(
            name=name,
            assignedto_id=assigned_to_id,
            include_all=None if case_ids is None else not case_ids,
            case_ids=sorted(case_ids) if case_ids else None,
        )
        return self._send_post(uri, PlanEntry.from_json, merge_json(entry.to_json(), customs))

    def update_project(
        self,
        project_id: int,
        name: str | None = None,
        announcement: str | None = None,
        show_announcement: bool | None = None,
        is_completed: bool | None = None,
    ) -> RequestResult[Project]:
        uri = build_uri(CommandType.UPDATE, CommandAction.PROJECT, project_id)
        project = Project(
            name=name,
            announcement=announcement,
            show_announcement=show_announcement,
            is_completed=is_completed,
        )
        return self._send_post(uri, Project.from_json, project.to_json())

    def update_run(
        self,
        run_id: int,
        name: str | None = None,
        description: str | None = None,
        milestone_id: int | None = None,
        case_ids=None,
        customs: dict | None = None,
    ) -> RequestResult[Run]:
        """Partially update a run.

        With *case_ids* the existing run is fetched to learn its project and
        suite, and the ids are checked against that suite the same way
        add_run does. Without *case_ids* the run is switched to include all
        cases.
        """
        include_all = True
        if case_ids:
            existing = self.get_run(run_id).payload
            if (
                existing is not None
                and existing.project_id is not None
                and existing.suite_id is not None
            ):
                failure = self._check_case_selection(
                    existing.project_id, existing.suite_id, case_ids
                )
                if failure is not None:
                    return failure
                include_all = False

        uri = build_uri(CommandType.UPDATE, CommandAction.RUN, run_id)
        run = Run(
            name=name,
            description=description,
            milestone_id=milestone_id,
            include_all=include_all,
            case_ids=sorted(case_ids) if case_ids else None,
        )
        return self._send_post(uri, Run.from_json, merge_json(run.to_json(), customs))

    def update_section(
        self,
        section_id: int,
        name: str,
        description: str | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Section]:
        failure = _required(name, "name")
        if failure:
            return failure
        uri = build_uri(CommandType.UPDATE, CommandAction.SECTION, section_id)
        section = Section(name=name, description=description)
        return self._send_post(uri, Section.from_json, merge_json(section.to_json(), customs))

    def update_suite(
        self,
        suite_id: int,
        name: str | None = None,
        description: str | None = None,
        customs: dict | None = None,
    ) -> RequestResult[Suite]:
        uri = build_uri(CommandType.UPDATE, CommandAction.SUITE, suite_id)
        suite = Suite(name=name, description=description)
        return self._send_post(uri, Suite.from_json, merge_json(suite.to_json(), customs))

    # -------------------------------------------------------------------
    # Close commands (cannot be undone)
    # -------------------------------------------------------------------

    def close_plan(self, plan_id: int) -> RequestResult[Plan]:
        """Close a plan and archive its runs and results."""
        uri = build_uri(CommandType.CLOSE, CommandAction.PLAN, plan_id)
        result = self._send_post(uri, Plan.from_json)
        if not result.ok:
            notify(self.events, "operation_failed", f"Could not close plan: {plan_id}")
        return result

    def close_run(self, run_id: int) -> RequestResult[Run]:
        """Close a run and archive its tests and results."""
        uri = build_uri(CommandType.CLOSE, CommandAction.RUN, run_id)
        result = self._send_post(uri, Run.from_json)
        if not result.ok:
            notify(self.events, "operation_failed", f"Could not close run: {run_id}")
        return result

    # -------------------------------------------------------------------
    # Delete commands
    # -------------------------------------------------------------------

    def _delete(self, action: CommandAction, id1: int, entry_id: str | None = None):
        return self._send_command(build_uri(CommandType.DELETE, action, id1, id2_str=entry_id))

    def delete_milestone(self, milestone_id: int) -> MutationResult:
        return self._delete(CommandAction.MILESTONE, milestone_id)

    def delete_case(self, case_id: int) -> MutationResult:
        return self._delete(CommandAction.CASE, case_id)

    def delete_plan(self, plan_id: int) -> MutationResult:
        return self._delete(CommandAction.PLAN, plan_id)

    def delete_plan_entry(self, plan_id: int, entry_id: str) -> MutationResult:
        """Delete one entry (GUID) of a plan. ``value`` is the first run id of the entry."""
        return self._delete(CommandAction.PLAN_ENTRY, plan_id, entry_id)

    def delete_project(self, project_id: int) -> MutationResult:
        return self._delete(CommandAction.PROJECT, project_id)

    def delete_section(self, section_id: int) -> MutationResult:
        return self._delete(CommandAction.SECTION, section_id)

    def delete_suite(self, suite_id: int) -> MutationResult:
        return self._delete(CommandAction.SUITE, suite_id)

    def delete_run(self, run_id: int) -> MutationResult:
        return self._delete(CommandAction.RUN, run_id)

    # -------------------------------------------------------------------
    # Get commands
    # -------------------------------------------------------------------

    def get_test(self, test_id: int) -> RequestResult[Test]:
        uri = build_uri(CommandType.GET, CommandAction.TEST, test_id)
        return self._send_get(uri, Test.from_json)

    def get_tests(self, run_id: int) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.TESTS, run_id)
        return self._send_get(uri, Test.from_json, many=True, key="tests")

    def get_case(self, case_id: int) -> RequestResult[Case]:
        uri = build_uri(CommandType.GET, CommandAction.CASE, case_id)
        return self._send_get(uri, Case.from_json)

    def get_cases(
        self, project_id: int, suite_id: int, section_id: int | None = None
    ) -> RequestResult[list]:
        """Cases of a project/suite, optionally narrowed to one section."""
        options = query_options(suite_id=suite_id, section_id=section_id)
        uri = build_uri(CommandType.GET, CommandAction.CASES, project_id, options=options)
        return self._send_get(uri, Case.from_json, many=True, key="cases")

    def get_case_fields(self) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.CASE_FIELDS)
        return self._send_get(uri, CaseField.from_json, many=True)

    def get_case_types(self) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.CASE_TYPES)
        return self._send_get(uri, CaseType.from_json, many=True)

    def get_suite(self, suite_id: int) -> RequestResult[Suite]:
        uri = build_uri(CommandType.GET, CommandAction.SUITE, suite_id)
        return self._send_get(uri, Suite.from_json)

    def get_suites(self, project_id: int) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.SUITES, project_id)
        return self._send_get(uri, Suite.from_json, many=True, key="suites")

    def get_section(self, section_id: int) -> RequestResult[Section]:
        uri = build_uri(CommandType.GET, CommandAction.SECTION, section_id)
        return self._send_get(uri, Section.from_json)

    def get_sections(self, project_id: int, suite_id: int) -> RequestResult[list]:
        options = query_options(suite_id=suite_id)
        uri = build_uri(CommandType.GET, CommandAction.SECTIONS, project_id, options=options)
        return self._send_get(uri, Section.from_json, many=True, key="sections")

    def get_run(self, run_id: int) -> RequestResult[Run]:
        return self._send_get(build_uri(CommandType.GET, CommandAction.RUN, run_id), Run.from_json)

    def get_runs(self, project_id: int) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.RUNS, project_id)
        return self._send_get(uri, Run.from_json, many=True, key="runs")

    def get_plan(self, plan_id: int) -> RequestResult[Plan]:
        uri = build_uri(CommandType.GET, CommandAction.PLAN, plan_id)
        return self._send_get(uri, Plan.from_json)

    def get_plans(self, project_id: int) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.PLANS, project_id)
        return self._send_get(uri, Plan.from_json, many=True, key="plans")

    def get_milestone(self, milestone_id: int) -> RequestResult[Milestone]:
        uri = build_uri(CommandType.GET, CommandAction.MILESTONE, milestone_id)
        return self._send_get(uri, Milestone.from_json)

    def get_milestones(self, project_id: int) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.MILESTONES, project_id)
        return self._send_get(uri, Milestone.from_json, many=True, key="milestones")

    def get_project(self, project_id: int) -> RequestResult[Project]:
        uri = build_uri(CommandType.GET, CommandAction.PROJECT, project_id)
        return self._send_get(uri, Project.from_json)

    def get_projects(self) -> RequestResult[list]:
        """All projects, live. Use the ``projects`` property for the cached list."""
        uri = build_uri(CommandType.GET, CommandAction.PROJECTS)
        return self._send_get(uri, Project.from_json, many=True, key="projects")

    def get_user(self, user_id: int) -> RequestResult[User]:
        uri = build_uri(CommandType.GET, CommandAction.USER, user_id)
        return self._send_get(uri, User.from_json)

    def get_user_by_email(self, email: str) -> RequestResult[User]:
        if _is_blank(email):
            return _bad_request("'email' must be a non-empty string.")
        options = query_options(email=email.strip())
        uri = build_uri(CommandType.GET, CommandAction.USER_BY_EMAIL, options=options)
        return self._send_get(uri, User.from_json)

    def get_users(self) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.USERS)
        return self._send_get(uri, User.from_json, many=True, key="users")

    def get_results(self, test_id: int, limit: int | None = None) -> RequestResult[list]:
        """Results for a test, latest first; *limit* caps the count."""
        options = query_options(limit=limit)
        uri = build_uri(CommandType.GET, CommandAction.RESULTS, test_id, options=options)
        return self._send_get(uri, Result.from_json, many=True, key="results")

    def get_results_for_case(
        self, run_id: int, case_id: int, limit: int | None = None
    ) -> RequestResult[list]:
        options = query_options(limit=limit)
        uri = build_uri(
            CommandType.GET, CommandAction.RESULTS_FOR_CASE, run_id, case_id, options=options
        )
        return self._send_get(uri, Result.from_json, many=True, key="results")

    def get_results_for_run(self, run_id: int, limit: int | None = None) -> RequestResult[list]:
        options = query_options(limit=limit)
        uri = build_uri(CommandType.GET, CommandAction.RESULTS_FOR_RUN, run_id, options=options)
        return self._send_get(uri, Result.from_json, many=True, key="results")

    def get_statuses(self) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.STATUSES)
        return self._send_get(uri, Status.from_json, many=True)

    def get_priorities(self) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.PRIORITIES)
        return self._send_get(uri, Priority.from_json, many=True)

    def get_configuration_groups(self, project_id: int) -> RequestResult[list]:
        uri = build_uri(CommandType.GET, CommandAction.CONFIGS, project_id)
        return self._send_get(uri, ConfigurationGroup.from_json, many=True)


