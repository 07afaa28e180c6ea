"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..config import CanvasClientConfig
from .models import PaginationRequest
from .params import build_page_params


def build_default_headers(config: CanvasClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: CanvasClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_base_url(config: CanvasClientConfig) -> str:
    return config.base_url.rstrip("/") + "/"


def normalize_endpoint(endpoint: str) -> str:
    return endpoint.lstrip("/")


def page_params(request: PaginationRequest, page_number: int) -> list[tuple[str, str]]:
    return build_page_params(page_number, request.per_page, request.options)


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_base_url",
    "normalize_endpoint",
    "page_params",
]
