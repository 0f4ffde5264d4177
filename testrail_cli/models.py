"""
Typed records for TestRail resources.

Attribute names follow the API's JSON keys. ``from_json`` accepts one JSON
object; ``to_json`` emits only the writable fields that are set, which is
what add_* and update_* endpoints expect. Custom fields (``custom_*`` keys)
are collected into ``customs`` on the records that support them.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta
from enum import Enum, IntEnum

from testrail_cli._utils import _format_elapsed, _parse_elapsed, _parse_timestamp, _to_timestamp


class ResultStatus(IntEnum):
    PASSED = 1
    BLOCKED = 2
    UNTESTED = 3
    RETEST = 4
    FAILED = 5
    CUSTOM_STATUS1 = 6
    CUSTOM_STATUS2 = 7
    CUSTOM_STATUS3 = 8
    CUSTOM_STATUS4 = 9
    CUSTOM_STATUS5 = 10
    CUSTOM_STATUS6 = 11
    CUSTOM_STATUS7 = 12


class SuiteMode(IntEnum):
    SINGLE_SUITE = 1
    SINGLE_SUITE_BASELINES = 2
    MULTIPLE_SUITES = 3


def _json_value(value):
    if isinstance(value, BaseModel):
        return value.to_json()
    if isinstance(value, datetime):
        return _to_timestamp(value)
    if isinstance(value, timedelta):
        return _format_elapsed(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


def _list_of(model):
    def parse(value):
        if not isinstance(value, list):
            return []
        return [model.from_json(v) for v in value if isinstance(v, dict)]

    return parse


@dataclass
class BaseModel:
    """Shared JSON plumbing. Subclasses declare _WRITE_FIELDS and _PARSERS."""

    _WRITE_FIELDS = ()
    _PARSERS = {}

    @classmethod
    def from_json(cls, data):
        data = data or {}
        kwargs = {}
        for f in fields(cls):
            if f.name == "customs" or f.name not in data:
                continue
            parser = cls._PARSERS.get(f.name)
            value = data[f.name]
            kwargs[f.name] = parser(value) if parser and value is not None else value
        obj = cls(**kwargs)
        if hasattr(obj, "customs"):
            obj.customs = {k: v for k, v in data.items() if k.startswith("custom_")}
        return obj

    def to_json(self):
        data = {}
        for name in self._WRITE_FIELDS:
            value = _json_value(getattr(self, name))
            if value is not None:
                data[name] = value
        customs = getattr(self, "customs", None)
        if customs:
            data.update(customs)
        return data


@dataclass
class Project(BaseModel):
    id: int | None = None
    name: str | None = None
    announcement: str | None = None
    show_announcement: bool | None = None
    is_completed: bool | None = None
    completed_on: datetime | None = None
    suite_mode: int | None = None
    url: str | None = None

    _WRITE_FIELDS = ("name", "announcement", "show_announcement", "is_completed", "suite_mode")
    _PARSERS = {"completed_on": _parse_timestamp}


@dataclass
class Suite(BaseModel):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    project_id: int | None = None
    is_master: bool | None = None
    is_baseline: bool | None = None
    is_completed: bool | None = None
    completed_on: datetime | None = None
    url: str | None = None

    _WRITE_FIELDS = ("name", "description")
    _PARSERS = {"completed_on": _parse_timestamp}


@dataclass
class Section(BaseModel):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    suite_id: int | None = None
    parent_id: int | None = None
    depth: int | None = None
    display_order: int | None = None

    _WRITE_FIELDS = ("suite_id", "parent_id", "name", "description")


@dataclass
class Case(BaseModel):
    id: int | None = None
    title: str | None = None
    section_id: int | None = None
    suite_id: int | None = None
    template_id: int | None = None
    type_id: int | None = None
    priority_id: int | None = None
    milestone_id: int | None = None
    refs: str | None = None
    estimate: str | None = None
    estimate_forecast: str | None = None
    created_by: int | None = None
    created_on: datetime | None = None
    updated_by: int | None = None
    updated_on: datetime | None = None
    customs: dict = field(default_factory=dict)

    _WRITE_FIELDS = (
        "title",
        "template_id",
        "type_id",
        "priority_id",
        "estimate",
        "milestone_id",
        "refs",
    )
    _PARSERS = {"created_on": _parse_timestamp, "updated_on": _parse_timestamp}


@dataclass
class CaseField(BaseModel):
    id: int | None = None
    name: str | None = None
    system_name: str | None = None
    label: str | None = None
    description: str | None = None
    type_id: int | None = None
    display_order: int | None = None
    configs: list = field(default_factory=list)


@dataclass
class CaseType(BaseModel):
    id: int | None = None
    name: str | None = None
    is_default: bool | None = None


@dataclass
class Milestone(BaseModel):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    project_id: int | None = None
    parent_id: int | None = None
    due_on: datetime | None = None
    start_on: datetime | None = None
    is_completed: bool | None = None
    completed_on: datetime | None = None
    url: str | None = None

    _WRITE_FIELDS = ("name", "description", "parent_id", "due_on", "start_on", "is_completed")
    _PARSERS = {
        "due_on": _parse_timestamp,
        "start_on": _parse_timestamp,
        "completed_on": _parse_timestamp,
    }


@dataclass
class Run(BaseModel):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    suite_id: int | None = None
    project_id: int | None = None
    plan_id: int | None = None
    milestone_id: int | None = None
    assignedto_id: int | None = None
    include_all: bool | None = None
    case_ids: list | None = None
    config: str | None = None
    config_ids: list | None = None
    is_completed: bool | None = None
    completed_on: datetime | None = None
    created_on: datetime | None = None
    created_by: int | None = None
    passed_count: int | None = None
    blocked_count: int | None = None
    untested_count: int | None = None
    retest_count: int | None = None
    failed_count: int | None = None
    url: str | None = None
    customs: dict = field(default_factory=dict)

    _WRITE_FIELDS = (
        "suite_id",
        "name",
        "description",
        "milestone_id",
        "assignedto_id",
        "include_all",
        "case_ids",
        "config_ids",
    )
    _PARSERS = {"completed_on": _parse_timestamp, "created_on": _parse_timestamp}


@dataclass
class PlanEntry(BaseModel):
    id: str | None = None
    suite_id: int | None = None
    name: str | None = None
    description: str | None = None
    assignedto_id: int | None = None
    include_all: bool | None = None
    case_ids: list | None = None
    config_ids: list | None = None
    runs: list = field(default_factory=list)

    _WRITE_FIELDS = (
        "suite_id",
        "name",
        "description",
        "assignedto_id",
        "include_all",
        "case_ids",
        "config_ids",
        "runs",
    )
    _PARSERS = {"runs": _list_of(Run)}

    def to_json(self):
        data = super().to_json()
        if not data.get("runs"):
            data.pop("runs", None)
        return data


@dataclass
class Plan(BaseModel):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    project_id: int | None = None
    milestone_id: int | None = None
    assignedto_id: int | None = None
    is_completed: bool | None = None
    completed_on: datetime | None = None
    created_on: datetime | None = None
    created_by: int | None = None
    passed_count: int | None = None
    failed_count: int | None = None
    url: str | None = None
    entries: list = field(default_factory=list)
    customs: dict = field(default_factory=dict)

    _WRITE_FIELDS = ("name", "description", "milestone_id", "entries")
    _PARSERS = {
        "completed_on": _parse_timestamp,
        "created_on": _parse_timestamp,
        "entries": _list_of(PlanEntry),
    }

    def to_json(self):
        data = super().to_json()
        if not data.get("entries"):
            data.pop("entries", None)
        return data


@dataclass
class Result(BaseModel):
    id: int | None = None
    test_id: int | None = None
    case_id: int | None = None
    status_id: int | None = None
    comment: str | None = None
    version: str | None = None
    elapsed: timedelta | None = None
    defects: str | None = None
    assignedto_id: int | None = None
    created_on: datetime | None = None
    created_by: int | None = None
    customs: dict = field(default_factory=dict)

    _WRITE_FIELDS = (
        "test_id",
        "case_id",
        "status_id",
        "comment",
        "version",
        "elapsed",
        "defects",
        "assignedto_id",
    )
    _PARSERS = {"elapsed": _parse_elapsed, "created_on": _parse_timestamp}


@dataclass
class Test(BaseModel):
    id: int | None = None
    case_id: int | None = None
    run_id: int | None = None
    status_id: int | None = None
    title: str | None = None
    assignedto_id: int | None = None
    type_id: int | None = None
    priority_id: int | None = None
    milestone_id: int | None = None
    estimate: str | None = None
    estimate_forecast: str | None = None
    refs: str | None = None
    customs: dict = field(default_factory=dict)

    __test__ = False  # keep pytest from collecting this class


@dataclass
class Status(BaseModel):
    id: int | None = None
    name: str | None = None
    label: str | None = None
    color_dark: int | None = None
    color_medium: int | None = None
    color_bright: int | None = None
    is_system: bool | None = None
    is_untested: bool | None = None
    is_final: bool | None = None


@dataclass
class Priority(BaseModel):
    id: int | None = None
    name: str | None = None
    short_name: str | None = None
    is_default: bool | None = None
    priority: int | None = None


@dataclass
class User(BaseModel):
    id: int | None = None
    name: str | None = None
    email: str | None = None
    is_active: bool | None = None
    role_id: int | None = None


@dataclass
class Configuration(BaseModel):
    id: int | None = None
    name: str | None = None
    group_id: int | None = None


@dataclass
class ConfigurationGroup(BaseModel):
    id: int | None = None
    name: str | None = None
    project_id: int | None = None
    configs: list = field(default_factory=list)

    _PARSERS = {"configs": _list_of(Configuration)}
