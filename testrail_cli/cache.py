"""Single-flight lazy values used for per-client reference data."""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class LazyValue(Generic[T]):
    """Compute a value at most once, on first access, even under concurrency.

    Concurrent first callers block on a lock while one of them runs the
    factory; all of them then see the same object. If the factory raises the
    cell stays empty and the next ``get()`` tries again.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._value = _UNSET
        self._lock = threading.Lock()

    @property
    def is_realized(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = self._factory()
            return self._value  # type: ignore[return-value]

    def reset(self) -> None:
        """Forget the value so the next ``get()`` recomputes it."""
        with self._lock:
            self._value = _UNSET
