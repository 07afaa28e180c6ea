"""Page decoders turning a page body into items."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from .errors import DecodeError
from .models import Page
from .response_parsing import parse_json_payload

T = TypeVar("T")

PageDecoder = Callable[[Page], Iterable[T]]


def decode_json_list(page: Page) -> list[Any]:
    payload = parse_json_payload(page.content, page_index=page.index)
    if not isinstance(payload, list):
        raise DecodeError(
            f"page {page.number} JSON root must be an array",
            page_index=page.index,
        )
    return payload


def json_list_decoder(factory: Callable[[Mapping[str, Any]], T]) -> PageDecoder[T]:
    """Build a decoder mapping each array element through ``factory``."""

    def _decode(page: Page) -> list[T]:
        items = []
        for element in decode_json_list(page):
            if not isinstance(element, Mapping):
                raise DecodeError(
                    f"page {page.number} contains a non-object element",
                    page_index=page.index,
                )
            try:
                items.append(factory(element))
            except (KeyError, TypeError, ValueError) as exc:
                raise DecodeError(
                    f"page {page.number} element could not be mapped: {exc}",
                    page_index=page.index,
                ) from exc
        return items

    return _decode


def raw_json_decoder(page: Page) -> list[Any]:
    return decode_json_list(page)


__all__ = [
    "PageDecoder",
    "decode_json_list",
    "json_list_decoder",
    "raw_json_decoder",
]
