"""Core pagination models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ..config import DEFAULT_PER_PAGE
from .params import Option


@dataclass(slots=True, frozen=True)
class PaginationRequest:
    """Immutable description of one pagination run."""

    base_path: str
    options: tuple[Option, ...] = ()
    per_page: int = DEFAULT_PER_PAGE

    def __post_init__(self) -> None:
        if self.per_page < 1:
            raise ValueError("per_page must be >= 1")
        object.__setattr__(self, "options", tuple(self.options))

    @classmethod
    def create(
        cls,
        base_path: str,
        options: Iterable[Option] = (),
        *,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> "PaginationRequest":
        return cls(base_path=base_path, options=tuple(options), per_page=per_page)


@dataclass(slots=True, frozen=True)
class Page:
    """One fetched page. ``index`` is 0-based, ``number`` is the wire page number."""

    index: int
    number: int
    content: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def link_header(self) -> str | None:
        for key, value in self.headers.items():
            if key.lower() == "link":
                return value
        return None


__all__ = [
    "PaginationRequest",
    "Page",
]
