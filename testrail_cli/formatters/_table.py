"""Low-level table rendering helpers (stdlib only)."""

import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    s = str(s)
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escape sequences and control chars from table output."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _cell(value):
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return _sanitize_str(str(value))


def _table(columns, rows, footer=None):
    """Build a formatted table string.
    columns: list of (name, width) tuples; the last column is not padded.
    rows: list of tuples matching columns."""
    last = len(columns) - 1
    header = " ".join(
        name if i == last else f"{name:<{width}}" for i, (name, width) in enumerate(columns)
    )
    lines = [header, "-" * max(len(header), 72)]
    for row in rows:
        cells = [_cell(v) for v in row]
        lines.append(
            " ".join(c if i == last else f"{c:<{columns[i][1]}}" for i, c in enumerate(cells))
        )
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)
