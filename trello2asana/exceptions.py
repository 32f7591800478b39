"""Custom exception classes for trello2asana.

Every error carries an explicit ``kind`` so the orchestrator, the HTTP
endpoint and the cleanup script can branch on what went wrong without
matching on message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a trello2asana failure"""

    NOT_FOUND = "not_found"
    REQUEST_FAILED = "request_failed"
    RATE_LIMITED = "rate_limited"
    VALIDATION = "validation"
    INTERNAL = "internal"


class Trello2AsanaError(Exception):
    """Base exception for all trello2asana errors

    Attributes:
        status_code: HTTP status returned by the remote API (if any)
        response_text: Raw response body from the remote API (if any)
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self, message: str, status_code: int | None = None, response_text: str | None = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class NotFoundError(Trello2AsanaError):
    """Raised when the source board does not exist (404)"""

    kind = ErrorKind.NOT_FOUND


class RequestFailedError(Trello2AsanaError):
    """Raised for any non-success response from Trello or Asana"""

    kind = ErrorKind.REQUEST_FAILED


class RateLimitError(RequestFailedError):
    """Raised when a remote API answers 429 Too Many Requests.

    Subclasses RequestFailedError so code that only handles generic request
    failures keeps working; the cleanup script catches it explicitly to
    back off and retry.
    """

    kind = ErrorKind.RATE_LIMITED


class ConfigurationError(Trello2AsanaError):
    """Raised when required environment variables are missing or malformed"""

    kind = ErrorKind.VALIDATION


class SyncError(Trello2AsanaError):
    """Raised by the orchestrator when a sync run aborts.

    Wraps the original failure; ``kind`` and ``status_code`` are copied from
    it when it is a trello2asana error, otherwise the kind is INTERNAL.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        status_code = None
        response_text = None
        self.kind = ErrorKind.INTERNAL
        if isinstance(cause, Trello2AsanaError):
            self.kind = cause.kind
            status_code = cause.status_code
            response_text = cause.response_text
        self.cause = cause
        super().__init__(message, status_code=status_code, response_text=response_text)
