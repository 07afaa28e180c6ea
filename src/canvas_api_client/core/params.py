"""Query options and page parameter construction."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger("canvas_api_client")

PAGE_KEY = "page"
PER_PAGE_KEY = "per_page"
_FIXED_KEYS = frozenset({PAGE_KEY, PER_PAGE_KEY})


@dataclass(slots=True, frozen=True)
class Option:
    """One query parameter; array options carry several values under ``key[]``."""

    key: str
    values: tuple[str, ...]

    def pairs(self) -> list[tuple[str, str]]:
        return [(self.key, value) for value in self.values]


def _rfc3339(date: datetime) -> str:
    # Naive datetimes are taken as UTC so the value always carries an offset.
    if date.tzinfo is None or date.utcoffset() is None:
        date = date.replace(tzinfo=timezone.utc)
    return date.isoformat()


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return _rfc3339(value)
    return str(value)


def opt(key: str, value: object) -> Option:
    return Option(key, (_stringify(value),))


def array_opt(key: str, *values: str) -> Option:
    return Option(f"{key}[]", tuple(values))


def include_opt(*values: str) -> Option:
    return array_opt("include", *values)


def sort_opt(*schemes: str) -> Option:
    return array_opt("sort", *schemes)


def content_types(*types: str) -> Option:
    return array_opt("content_types", *types)


def content_type(value: str) -> Option:
    return opt("content_type", value)


def date_opt(key: str, date: datetime) -> Option:
    """Date option in RFC 3339 form."""
    return Option(key, (_rfc3339(date),))


def user_opt(key: str, value: str) -> Option:
    return Option(f"user[{key}]", (value,))


COMPLETED_COURSES = opt("enrollment_state", "completed")
ACTIVE_COURSES = opt("enrollment_state", "active")
INVITED_OR_PENDING_COURSES = opt("enrollment_state", "invited_or_pending")

OPT_TEACHER = opt("enrollment_type", "teacher")
OPT_STUDENT = opt("enrollment_type", "student")
OPT_TA = opt("enrollment_type", "ta")
OPT_OBSERVER = opt("enrollment_type", "observer")
OPT_DESIGNER = opt("enrollment_type", "designer")


def options_to_pairs(options: Iterable[Option]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for option in options:
        pairs.extend(option.pairs())
    return pairs


def build_page_params(
    page: int,
    per_page: int,
    options: Iterable[Option] = (),
) -> list[tuple[str, str]]:
    """Return ordered query pairs; ``page`` and ``per_page`` always win."""

    params = [(PAGE_KEY, str(page)), (PER_PAGE_KEY, str(per_page))]
    for key, value in options_to_pairs(options):
        if key in _FIXED_KEYS:
            logger.warning("dropping caller option that overrides pagination key=%s", key)
            continue
        params.append((key, value))
    return params


__all__ = [
    "PAGE_KEY",
    "PER_PAGE_KEY",
    "Option",
    "opt",
    "array_opt",
    "include_opt",
    "sort_opt",
    "content_types",
    "content_type",
    "date_opt",
    "user_opt",
    "COMPLETED_COURSES",
    "ACTIVE_COURSES",
    "INVITED_OR_PENDING_COURSES",
    "OPT_TEACHER",
    "OPT_STUDENT",
    "OPT_TA",
    "OPT_OBSERVER",
    "OPT_DESIGNER",
    "options_to_pairs",
    "build_page_params",
]
