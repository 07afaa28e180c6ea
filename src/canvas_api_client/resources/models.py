"""Canvas resource models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Account:
    id: int
    name: str | None
    uuid: str | None
    parent_account_id: int | None
    root_account_id: int | None
    workflow_state: str | None
    default_time_zone: str | None
    sis_account_id: str | None


@dataclass(slots=True, frozen=True)
class Course:
    id: int
    name: str | None
    course_code: str | None
    uuid: str | None
    workflow_state: str | None
    account_id: int | None
    enrollment_term_id: int | None
    start_at: str | None
    end_at: str | None
    locale: str | None


@dataclass(slots=True, frozen=True)
class User:
    id: int
    name: str | None
    sortable_name: str | None
    short_name: str | None
    login_id: str | None
    email: str | None
    avatar_url: str | None
    locale: str | None
    time_zone: str | None


@dataclass(slots=True, frozen=True)
class Assignment:
    id: int
    course_id: int | None
    name: str | None
    description: str | None
    due_at: str | None
    lock_at: str | None
    unlock_at: str | None
    points_possible: float | None
    assignment_group_id: int | None
    html_url: str | None
    published: bool


@dataclass(slots=True, frozen=True)
class File:
    id: int
    folder_id: int | None
    filename: str | None
    display_name: str | None
    content_type: str | None
    size: int | None
    url: str | None
    uuid: str | None
    created_at: str | None
    updated_at: str | None
    locked: bool
    hidden: bool


@dataclass(slots=True, frozen=True)
class Folder:
    id: int
    parent_folder_id: int | None
    name: str | None
    full_name: str | None
    files_count: int | None
    folders_count: int | None
    context_type: str | None
    context_id: int | None
    locked: bool
    hidden: bool


__all__ = [
    "Account",
    "Course",
    "User",
    "Assignment",
    "File",
    "Folder",
]
