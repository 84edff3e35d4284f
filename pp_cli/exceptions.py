"""
pp-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 — validation, lookup, API, network, parse errors."""

    exit_code = 1


class SetupError(CliError):
    """Exit code 2 — missing or expired access token."""

    exit_code = 2


class ValidationError(CliError):
    """Bad option values. Raised before any network call."""


class CardLookupError(CliError):
    """A card name did not resolve to exactly one card."""


class ApiError(CliError):
    """The service rejected a request (non-2xx response)."""

    def __init__(self, message, status=None):
        super().__init__(f"[ERROR] {message}")
        self.message = message
        self.status = status


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
