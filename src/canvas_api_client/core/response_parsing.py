"""Shared response helpers for sync/async transports."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Protocol

from .errors import CanvasApiError, DecodeError, classify_http_error
from .models import Page


class StatusResponse(Protocol):
    status_code: int
    reason_phrase: str
    content: bytes
    headers: Mapping[str, str]


def response_error(response: StatusResponse) -> CanvasApiError | None:
    """Map a non-2xx response to a domain error."""

    return classify_http_error(
        response.status_code,
        reason=getattr(response, "reason_phrase", "") or "",
        body=getattr(response, "content", b"") or b"",
        headers=getattr(response, "headers", None),
    )


def to_page(response: StatusResponse, *, number: int) -> Page:
    return Page(
        index=number - 1,
        number=number,
        content=response.content,
        headers=dict(response.headers),
    )


def parse_json_payload(content: bytes, *, page_index: int | None = None) -> object:
    """Parse a response body and map parse failures to DecodeError."""

    try:
        return json.loads(content)
    except ValueError as exc:
        raise DecodeError(
            "response body is not valid JSON",
            page_index=page_index,
        ) from exc


def parse_json_object(content: bytes) -> dict[str, object]:
    payload = parse_json_payload(content)
    if not isinstance(payload, dict):
        raise DecodeError("response JSON root must be an object")
    return payload


__all__ = [
    "response_error",
    "to_page",
    "parse_json_payload",
    "parse_json_object",
]
