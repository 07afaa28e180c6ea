"""Sync HTTP transport with status evaluation. Failed requests are not retried."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

import httpx

from ..config import CanvasClientConfig
from .auth import BearerTokenAuth
from .errors import CanvasTransportError
from .models import Page, PaginationRequest
from .response_parsing import response_error, to_page
from .transport_shared import (
    build_base_url,
    build_default_headers,
    build_default_timeout,
    normalize_endpoint,
    page_params,
)

logger = logging.getLogger("canvas_api_client")


class SyncTransportClient(Protocol):
    def get(self, url: str, *, params: Sequence[tuple[str, str]], auth: httpx.Auth) -> object: ...
    def close(self) -> None: ...


class SyncTransport:
    """Synchronous transport for the Canvas API."""

    def __init__(
        self,
        config: CanvasClientConfig,
        *,
        client: SyncTransportClient | None = None,
        auth: BearerTokenAuth | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self.auth = auth or BearerTokenAuth(config.token)
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=build_base_url(config),
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def set_token(self, token: str) -> None:
        self.auth.set_token(token)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "close"):
            self._client.close()

    def get(self, endpoint: str, *, params: Sequence[tuple[str, str]] = ()) -> httpx.Response:
        if self._closed:
            raise CanvasTransportError("transport is already closed")

        normalized_endpoint = normalize_endpoint(endpoint)
        logger.debug("request start endpoint=%s", normalized_endpoint)
        try:
            response = self._client.get(normalized_endpoint, params=list(params), auth=self.auth)
        except Exception as exc:
            logger.error(
                "request network error endpoint=%s error=%s",
                normalized_endpoint,
                exc.__class__.__name__,
            )
            raise CanvasTransportError("network/transport error", cause="network") from exc

        http_status = getattr(response, "status_code", None)
        logger.debug(
            "response received endpoint=%s http_status=%s",
            normalized_endpoint,
            http_status,
        )
        mapped_error = response_error(response)
        if mapped_error is not None:
            logger.error(
                "request failed endpoint=%s http_status=%s error=%s",
                normalized_endpoint,
                http_status,
                mapped_error.__class__.__name__,
            )
            raise mapped_error
        return response

    def fetch_page(self, request: PaginationRequest, page_number: int) -> Page:
        response = self.get(request.base_path, params=page_params(request, page_number))
        return to_page(response, number=page_number)


__all__ = [
    "SyncTransport",
]
