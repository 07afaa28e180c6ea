"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

DEFAULT_HOST = "canvas.instructure.com"
DEFAULT_PER_PAGE = 10


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class PaginationConfig:
    """Pagination-related settings."""

    per_page: int = DEFAULT_PER_PAGE
    max_workers: int = 8
    stream_buffer_size: int = 64

    def validate(self) -> None:
        for field_name in ("per_page", "max_workers", "stream_buffer_size"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"pagination.{field_name} must be int")
            if value < 1:
                raise ValueError(f"pagination.{field_name} must be >= 1")


@dataclass(slots=True, frozen=True)
class CanvasClientConfig:
    """Runtime configuration for Canvas client."""

    host: str = DEFAULT_HOST
    scheme: str = "https"
    api_path: str = "/api/v1"
    token: str = ""
    user_agent: str = "canvas-api-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}/{self.api_path.strip('/')}"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> "CanvasClientConfig":
        env = os.environ if environ is None else environ
        values: dict[str, object] = {"token": env.get("CANVAS_TOKEN", "")}
        host = env.get("CANVAS_HOST")
        if host:
            values["host"] = host
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]

    def validate(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        if self.scheme not in ("http", "https"):
            raise ValueError("scheme must be http or https")
        if not self.api_path.startswith("/"):
            raise ValueError("api_path must start with '/'")
        self.transport.validate()
        self.pagination.validate()


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PER_PAGE",
    "TransportConfig",
    "PaginationConfig",
    "CanvasClientConfig",
]
