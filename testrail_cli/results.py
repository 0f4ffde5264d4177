"""Result envelopes returned by the TestRail engine.

CallResult is the raw outcome of one HTTP exchange. RequestResult wraps a
parsed payload with an HTTP status; MutationResult carries the identifier
produced by delete-style commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CallResult:
    """Raw outcome of a single transport invocation."""

    was_successful: bool
    value: str = ""
    status: int | None = None
    error: Exception | None = None


@dataclass(frozen=True)
class RequestResult(Generic[T]):
    """Uniform return value of read, add, update and close operations.

    ``status_code`` is OK exactly when ``error`` is None. The payload may
    still be None on OK when the server sent an empty body.
    """

    status_code: HTTPStatus
    payload: T | None = None
    error: Exception | None = None
    raw_json: str | None = None

    @property
    def ok(self) -> bool:
        return self.status_code == HTTPStatus.OK

    @classmethod
    def success(cls, payload, raw_json=None) -> RequestResult:
        return cls(HTTPStatus.OK, payload=payload, raw_json=raw_json)

    @classmethod
    def failure(cls, status_code: HTTPStatus, error: Exception) -> RequestResult:
        return cls(status_code, error=error)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a delete-style command. ``value`` is 0 when no id came back."""

    succeeded: bool
    value: int = 0
    error: Exception | None = None
