"""
Shared pure-utility functions for testrail-cli.

These helpers have no business logic and no side effects.
They are used across models.py, client.py and formatters.
"""

import re
from datetime import datetime, timedelta, timezone

_ELAPSED_RE = re.compile(r"(\d+)\s*([wdhms])")
_ELAPSED_UNITS = {"w": 604800, "d": 86400, "h": 3600, "m": 60, "s": 1}


def _is_blank(value):
    """True for None, empty, or whitespace-only strings."""
    return value is None or not str(value).strip()


def _parse_timestamp(ts):
    """Parse a UNIX timestamp from the API into an aware datetime."""
    if ts is None or isinstance(ts, bool):
        return None
    try:
        return datetime.fromtimestamp(int(ts), tz=timezone.utc)
    except (ValueError, TypeError, OverflowError, OSError):
        return None


def _to_timestamp(dt):
    """Convert a datetime to the UNIX timestamp the API expects."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def _parse_elapsed(text):
    """Parse a timespan like "1h 5m 30s" into a timedelta. None if unparseable."""
    if not text or not isinstance(text, str):
        return None
    matches = _ELAPSED_RE.findall(text.lower())
    if not matches:
        return None
    seconds = sum(int(n) * _ELAPSED_UNITS[unit] for n, unit in matches)
    return timedelta(seconds=seconds)


def _format_elapsed(delta):
    """Format a timedelta as "1h 5m 30s". Zero-length spans become "0s"."""
    if delta is None:
        return None
    total = int(delta.total_seconds())
    if total <= 0:
        return "0s"
    parts = []
    for unit in ("h", "m", "s"):
        size = _ELAPSED_UNITS[unit]
        amount, total = divmod(total, size)
        if amount:
            parts.append(f"{amount}{unit}")
    return " ".join(parts)
