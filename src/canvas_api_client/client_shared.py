"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from collections.abc import Iterable

from .config import CanvasClientConfig
from .core.errors import CanvasValidationError
from .core.models import PaginationRequest
from .core.params import Option


def validate_client_config(config: CanvasClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise CanvasValidationError(str(exc)) from exc


def build_request(
    config: CanvasClientConfig,
    path: str,
    options: Iterable[Option],
    *,
    per_page: int | None = None,
) -> PaginationRequest:
    try:
        return PaginationRequest.create(
            path,
            options,
            per_page=config.pagination.per_page if per_page is None else per_page,
        )
    except ValueError as exc:
        raise CanvasValidationError(str(exc)) from exc


def courses_path() -> str:
    return "courses"


def course_path(course_id: int | str) -> str:
    return f"courses/{course_id}"


def course_users_path(course_id: int | str) -> str:
    return f"courses/{course_id}/users"


def course_files_path(course_id: int | str) -> str:
    return f"courses/{course_id}/files"


def course_folders_path(course_id: int | str) -> str:
    return f"courses/{course_id}/folders"


def folder_files_path(folder_id: int | str) -> str:
    return f"folders/{folder_id}/files"


def folder_folders_path(folder_id: int | str) -> str:
    return f"folders/{folder_id}/folders"


def user_path(user_id: int | str) -> str:
    return f"users/{user_id}"


def user_files_path(user_id: int | str) -> str:
    return f"users/{user_id}/files"


def course_assignments_path(course_id: int | str) -> str:
    return f"courses/{course_id}/assignments"


def accounts_path() -> str:
    return "accounts"


def account_path(account_id: int | str) -> str:
    return f"accounts/{account_id}"


def account_courses_path(account_id: int | str) -> str:
    return f"accounts/{account_id}/courses"


def course_accounts_path() -> str:
    return "course_accounts"


def search_accounts_path() -> str:
    return "accounts/search"


__all__ = [
    "validate_client_config",
    "build_request",
    "courses_path",
    "course_path",
    "course_users_path",
    "course_files_path",
    "course_folders_path",
    "folder_files_path",
    "folder_folders_path",
    "user_path",
    "user_files_path",
    "course_assignments_path",
    "accounts_path",
    "account_path",
    "account_courses_path",
    "course_accounts_path",
    "search_accounts_path",
]
