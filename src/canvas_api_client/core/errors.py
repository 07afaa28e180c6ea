"""Error types and status mapping."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

RATE_LIMIT_MESSAGE = "403 Forbidden (Rate Limit Exceeded)"
RATE_LIMIT_MARKER = "Rate Limit Exceeded"
RATE_LIMIT_REMAINING_HEADER = "X-Rate-Limit-Remaining"


class CanvasApiError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.cause = cause


class CanvasTransportError(CanvasApiError):
    """Network/transport-level failure."""


class CanvasClientClosedError(CanvasApiError):
    """Raised when client is used after close."""


class CanvasValidationError(CanvasApiError):
    """Invalid input / configuration."""


class APIError(CanvasApiError):
    """Generic non-2xx response carrying the decoded error body."""

    def __init__(
        self,
        message: str = "",
        *,
        status: str = "",
        error: str = "",
        sentry_id: str = "",
        end_date: str = "",
        http_status: int | None = None,
    ) -> None:
        self.message = message
        self.status = status
        self.error = error
        self.sentry_id = sentry_id
        self.end_date = end_date
        super().__init__(self._render(), http_status=http_status, cause="api")

    def _render(self) -> str:
        if self.message:
            return self.message
        if self.end_date:
            return f"end_date: {self.end_date}"
        if self.sentry_id:
            return f"error status: {self.error}; sentryId: {self.sentry_id}"
        if self.status:
            return f"canvas error: {self.status}"
        return "canvas error"

    @classmethod
    def from_payload(
        cls,
        payload: object,
        *,
        status: str = "",
        http_status: int | None = None,
    ) -> "APIError":
        if not isinstance(payload, Mapping):
            return cls(status=status, http_status=http_status)
        errors = payload.get("errors")
        end_date = ""
        if isinstance(errors, Mapping) and errors.get("end_date") is not None:
            end_date = str(errors["end_date"])
        return cls(
            _text(payload.get("message")),
            status=status,
            error=_text(payload.get("error")),
            sentry_id=_text(payload.get("sentryId")),
            end_date=end_date,
            http_status=http_status,
        )


class AuthenticationError(CanvasApiError):
    """Authentication failure; the API also reports it as 404 on protected collections."""

    def __init__(
        self,
        status: str = "",
        errors: Sequence[str] = (),
        *,
        http_status: int | None = None,
    ) -> None:
        self.status = status
        self.errors = tuple(errors)
        joined = ", ".join(self.errors)
        message = joined if not status else f"{status}: {joined}"
        super().__init__(message, http_status=http_status, cause="auth")

    @classmethod
    def from_payload(
        cls,
        payload: object,
        *,
        http_status: int | None = None,
    ) -> "AuthenticationError":
        if not isinstance(payload, Mapping):
            return cls(http_status=http_status)
        messages: list[str] = []
        raw_errors = payload.get("errors")
        if isinstance(raw_errors, Sequence) and not isinstance(raw_errors, str):
            for entry in raw_errors:
                if isinstance(entry, Mapping) and entry.get("message") is not None:
                    messages.append(str(entry["message"]))
                elif isinstance(entry, str):
                    messages.append(entry)
        return cls(_text(payload.get("status")), messages, http_status=http_status)


class RateLimitExceeded(CanvasApiError):
    """HTTP 403, the API's rate limit signal."""

    def __init__(
        self,
        message: str = RATE_LIMIT_MESSAGE,
        *,
        remaining: str | None = None,
        http_status: int | None = 403,
    ) -> None:
        super().__init__(message, http_status=http_status, cause="rate_limit")
        self.remaining = remaining


class PaginationError(CanvasApiError):
    """Pagination metadata or run lifecycle failure."""


class MalformedPaginationMetadata(PaginationError):
    """A Link header relation could not be parsed."""


class MissingPaginationRelation(PaginationError):
    """A required Link header relation is absent."""

    def __init__(self, relation: str) -> None:
        super().__init__(f"could not find {relation} page", cause="pagination")
        self.relation = relation


class DecodeError(CanvasApiError):
    """A page body is not the expected JSON document."""

    def __init__(self, message: str, *, page_index: int | None = None) -> None:
        super().__init__(message, cause="decode")
        self.page_index = page_index


def is_rate_limit(err: BaseException | None) -> bool:
    """Report whether ``err`` is a rate limit condition.

    Errors that went through a serialization boundary lose their type, so
    the message is checked as well.
    """

    if err is None:
        return False
    if isinstance(err, RateLimitExceeded):
        return True
    return RATE_LIMIT_MARKER in str(err)


def is_auth_error(err: BaseException | None) -> bool:
    return isinstance(err, AuthenticationError)


def classify_http_error(
    http_status: int,
    *,
    reason: str = "",
    body: bytes = b"",
    headers: Mapping[str, str] | None = None,
) -> CanvasApiError | None:
    """Map a response status to a domain exception; ``None`` on 2xx."""

    if 200 <= http_status < 300:
        return None
    status_line = f"{http_status} {reason}".strip()
    if http_status == 403:
        remaining = None
        if headers is not None:
            remaining = headers.get(RATE_LIMIT_REMAINING_HEADER)
        return RateLimitExceeded(remaining=remaining, http_status=http_status)
    if http_status == 422:
        return APIError(status_line, status=status_line, http_status=http_status)

    payload = _decode_body(body)
    if http_status in (401, 404):
        return AuthenticationError.from_payload(payload, http_status=http_status)
    return APIError.from_payload(payload, status=status_line, http_status=http_status)


def _decode_body(body: bytes) -> object:
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def _text(value: object) -> str:
    return "" if value is None else str(value)


__all__ = [
    "RATE_LIMIT_MESSAGE",
    "RATE_LIMIT_REMAINING_HEADER",
    "CanvasApiError",
    "CanvasTransportError",
    "CanvasClientClosedError",
    "CanvasValidationError",
    "APIError",
    "AuthenticationError",
    "RateLimitExceeded",
    "PaginationError",
    "MalformedPaginationMetadata",
    "MissingPaginationRelation",
    "DecodeError",
    "is_rate_limit",
    "is_auth_error",
    "classify_http_error",
]
