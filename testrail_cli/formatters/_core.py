"""Core output dispatchers and JSON conversion of client results."""

import json
from dataclasses import fields, is_dataclass
from datetime import datetime, timedelta
from enum import Enum

from testrail_cli import config
from testrail_cli._utils import _format_elapsed
from testrail_cli.results import MutationResult, RequestResult


def to_jsonable(value):
    """Convert records, results and their values into JSON-ready data."""
    if isinstance(value, RequestResult):
        return {
            "ok": value.ok,
            "status": value.status_code.value,
            "data": to_jsonable(value.payload),
            "error": str(value.error) if value.error else None,
        }
    if isinstance(value, MutationResult):
        return {
            "ok": value.succeeded,
            "id": value.value,
            "error": str(value.error) if value.error else None,
        }
    if is_dataclass(value) and not isinstance(value, type):
        out = {}
        for f in fields(value):
            v = getattr(value, f.name)
            if f.name == "customs":
                out.update(to_jsonable(v or {}))
            elif v is not None:
                out[f.name] = to_jsonable(v)
        return out
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return _format_elapsed(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return value


def pretty_print(data):
    print(json.dumps(to_jsonable(data), indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="json"):
    """Output data in requested format."""
    if fmt == "table" and formatter:
        print(formatter(data))
    else:
        pretty_print(data)


def mutation_response(action, entity_id=None, details=None, fmt="json"):
    """Print a mutation confirmation."""
    if fmt == "json":
        payload = {"ok": True, "mutation": {"action": action, "id": entity_id, "details": details}}
        print(json.dumps(to_jsonable(payload), ensure_ascii=False))
        return
    if config.RUNTIME_QUIET:
        return
    parts = [action]
    if entity_id:
        parts.append(f"#{entity_id}")
    if details:
        parts.append(details)
    print(f"OK: {': '.join(parts)}")
