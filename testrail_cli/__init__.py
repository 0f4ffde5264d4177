"""testrail-cli — typed client and CLI for the TestRail v2 HTTP API."""

from testrail_cli.client import TestRailClient
from testrail_cli.config import VERSION
from testrail_cli.events import CallbackEvents, ClientEvents, HttpLogEvents
from testrail_cli.exceptions import CliError, HTTPError, SetupError, TransportError
from testrail_cli.models import (
    Case,
    CaseField,
    CaseType,
    Configuration,
    ConfigurationGroup,
    Milestone,
    Plan,
    PlanEntry,
    Priority,
    Project,
    Result,
    ResultStatus,
    Run,
    Section,
    Status,
    Suite,
    SuiteMode,
    Test,
    User,
)
from testrail_cli.results import CallResult, MutationResult, RequestResult
from testrail_cli.uri import CommandAction, CommandType, build_uri

__all__ = [
    "VERSION",
    "TestRailClient",
    "CliError",
    "SetupError",
    "HTTPError",
    "TransportError",
    "ClientEvents",
    "HttpLogEvents",
    "CallbackEvents",
    "CallResult",
    "RequestResult",
    "MutationResult",
    "CommandAction",
    "CommandType",
    "build_uri",
    "Case",
    "CaseField",
    "CaseType",
    "Configuration",
    "ConfigurationGroup",
    "Milestone",
    "Plan",
    "PlanEntry",
    "Priority",
    "Project",
    "Result",
    "ResultStatus",
    "Run",
    "Section",
    "Status",
    "Suite",
    "SuiteMode",
    "Test",
    "User",
]
