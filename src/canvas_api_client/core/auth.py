"""Bearer token authentication shared by every request of a client."""

from __future__ import annotations

import threading
from collections.abc import Generator

import httpx


class BearerTokenAuth(httpx.Auth):
    """Writes the token when a request is sent, so rotation affects only unsent requests."""

    def __init__(self, token: str = "") -> None:
        self._token = token
        self._lock = threading.Lock()

    @property
    def token(self) -> str:
        with self._lock:
            return self._token

    def set_token(self, token: str) -> None:
        with self._lock:
            self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


__all__ = [
    "BearerTokenAuth",
]
