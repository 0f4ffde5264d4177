"""
Endpoint path construction for the TestRail v2 API.

Paths look like ``?/api/v2/get_cases/3&suite_id=7`` and are appended to
``<base>/index.php`` by the transport layer.
"""

from __future__ import annotations

import urllib.parse
from enum import Enum

from testrail_cli import config


class CommandType(str, Enum):
    """Verb prefix of an endpoint."""

    GET = "get"
    ADD = "add"
    UPDATE = "update"
    CLOSE = "close"
    DELETE = "delete"


class CommandAction(str, Enum):
    """Resource part of an endpoint."""

    CASE = "case"
    CASES = "cases"
    CASE_FIELDS = "case_fields"
    CASE_TYPES = "case_types"
    CONFIGS = "configs"
    MILESTONE = "milestone"
    MILESTONES = "milestones"
    PLAN = "plan"
    PLANS = "plans"
    PLAN_ENTRY = "plan_entry"
    PRIORITIES = "priorities"
    PROJECT = "project"
    PROJECTS = "projects"
    RESULT = "result"
    RESULTS = "results"
    RESULT_FOR_CASE = "result_for_case"
    RESULTS_FOR_CASE = "results_for_case"
    RESULTS_FOR_CASES = "results_for_cases"
    RESULTS_FOR_RUN = "results_for_run"
    RUN = "run"
    RUNS = "runs"
    SECTION = "section"
    SECTIONS = "sections"
    STATUSES = "statuses"
    SUITE = "suite"
    SUITES = "suites"
    TEST = "test"
    TESTS = "tests"
    USER = "user"
    USERS = "users"
    USER_BY_EMAIL = "user_by_email"


def build_uri(
    command: CommandType,
    action: CommandAction,
    id1: int | None = None,
    id2: int | None = None,
    options: str | None = None,
    id2_str: str | None = None,
) -> str:
    """Build the relative endpoint path for a command.

    ``id2`` wins over ``id2_str`` when both are given; ``id2_str`` carries
    non-numeric keys such as plan entry GUIDs. ``options`` is appended as-is
    and is expected to start with ``&``.
    """
    uri = f"{config.API_PREFIX}{command.value}_{action.value}"
    if id1 is not None:
        uri += f"/{id1}"
    if id2 is not None:
        uri += f"/{id2}"
    elif id2_str is not None and id2_str.strip():
        uri += f"/{id2_str}"
    if options is not None and options.strip():
        uri += options
    return uri


def query_options(**params) -> str:
    """Render ``&key=value`` fragments, dropping params whose value is None."""
    return "".join(
        f"&{key}={urllib.parse.quote(str(value), safe='@,.')}"
        for key, value in params.items()
        if value is not None
    )
