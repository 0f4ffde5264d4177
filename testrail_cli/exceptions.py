"""
testrail-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 — validation, not-found, network, parse errors."""

    exit_code = 1


class SetupError(CliError):
    """Exit code 2 — missing URL or credentials."""

    exit_code = 2


class TransportError(CliError):
    """The request never produced an HTTP response (refused, timeout, bad body)."""


class HTTPError(CliError):
    """Raised by _http_request when the server answers with an error status."""

    def __init__(self, code, reason, body, headers=None):
        super().__init__(f"HTTP {code}: {reason}")
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
