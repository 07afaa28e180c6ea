"""Parsers from Canvas JSON objects into typed resource models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.decoding import json_list_decoder
from .models import Account, Assignment, Course, File, Folder, User

JsonObject = Mapping[str, Any]


def _text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _required_id(payload: JsonObject) -> int:
    value = _int(payload.get("id"))
    if value is None:
        raise ValueError("object has no integer id")
    return value


def parse_account(payload: JsonObject) -> Account:
    return Account(
        id=_required_id(payload),
        name=_text(payload.get("name")),
        uuid=_text(payload.get("uuid")),
        parent_account_id=_int(payload.get("parent_account_id")),
        root_account_id=_int(payload.get("root_account_id")),
        workflow_state=_text(payload.get("workflow_state")),
        default_time_zone=_text(payload.get("default_time_zone")),
        sis_account_id=_text(payload.get("sis_account_id")),
    )


def parse_course(payload: JsonObject) -> Course:
    return Course(
        id=_required_id(payload),
        name=_text(payload.get("name")),
        course_code=_text(payload.get("course_code")),
        uuid=_text(payload.get("uuid")),
        workflow_state=_text(payload.get("workflow_state")),
        account_id=_int(payload.get("account_id")),
        enrollment_term_id=_int(payload.get("enrollment_term_id")),
        start_at=_text(payload.get("start_at")),
        end_at=_text(payload.get("end_at")),
        locale=_text(payload.get("locale")),
    )


def parse_user(payload: JsonObject) -> User:
    return User(
        id=_required_id(payload),
        name=_text(payload.get("name")),
        sortable_name=_text(payload.get("sortable_name")),
        short_name=_text(payload.get("short_name")),
        login_id=_text(payload.get("login_id")),
        email=_text(payload.get("email")),
        avatar_url=_text(payload.get("avatar_url")),
        locale=_text(payload.get("locale")),
        time_zone=_text(payload.get("time_zone")),
    )


def parse_assignment(payload: JsonObject) -> Assignment:
    return Assignment(
        id=_required_id(payload),
        course_id=_int(payload.get("course_id")),
        name=_text(payload.get("name")),
        description=_text(payload.get("description")),
        due_at=_text(payload.get("due_at")),
        lock_at=_text(payload.get("lock_at")),
        unlock_at=_text(payload.get("unlock_at")),
        points_possible=_float(payload.get("points_possible")),
        assignment_group_id=_int(payload.get("assignment_group_id")),
        html_url=_text(payload.get("html_url")),
        published=bool(payload.get("published", False)),
    )


def parse_file(payload: JsonObject) -> File:
    return File(
        id=_required_id(payload),
        folder_id=_int(payload.get("folder_id")),
        filename=_text(payload.get("filename")),
        display_name=_text(payload.get("display_name")),
        # Canvas spells this key with a hyphen.
        content_type=_text(payload.get("content-type")),
        size=_int(payload.get("size")),
        url=_text(payload.get("url")),
        uuid=_text(payload.get("uuid")),
        created_at=_text(payload.get("created_at")),
        updated_at=_text(payload.get("updated_at")),
        locked=bool(payload.get("locked", False)),
        hidden=bool(payload.get("hidden", False)),
    )


def parse_folder(payload: JsonObject) -> Folder:
    return Folder(
        id=_required_id(payload),
        parent_folder_id=_int(payload.get("parent_folder_id")),
        name=_text(payload.get("name")),
        full_name=_text(payload.get("full_name")),
        files_count=_int(payload.get("files_count")),
        folders_count=_int(payload.get("folders_count")),
        context_type=_text(payload.get("context_type")),
        context_id=_int(payload.get("context_id")),
        locked=bool(payload.get("locked", False)),
        hidden=bool(payload.get("hidden", False)),
    )


decode_courses = json_list_decoder(parse_course)
decode_users = json_list_decoder(parse_user)
decode_files = json_list_decoder(parse_file)
decode_folders = json_list_decoder(parse_folder)
decode_accounts = json_list_decoder(parse_account)
decode_assignments = json_list_decoder(parse_assignment)


__all__ = [
    "parse_account",
    "parse_course",
    "parse_user",
    "parse_assignment",
    "parse_file",
    "parse_folder",
    "decode_courses",
    "decode_users",
    "decode_files",
    "decode_folders",
    "decode_accounts",
    "decode_assignments",
]
