from __future__ import annotations

from canvas_api_client.core.models import Page
from canvas_api_client.resources.parser import (
    decode_files,
    parse_account,
    parse_assignment,
    parse_course,
    parse_file,
    parse_folder,
    parse_user,
)
from tests.shared.payloads import make_course_payload


def test_parse_course_reads_known_fields_and_ignores_extras():
    course = parse_course(make_course_payload(5, extra="ignored"))
    assert course.id == 5
    assert course.course_code == "C5"
    assert course.workflow_state == "available"
    assert course.start_at is None


def test_parse_user_tolerates_missing_optional_fields():
    user = parse_user({"id": "9", "name": "Ada"})
    assert user.id == 9
    assert user.name == "Ada"
    assert user.email is None


def test_parse_file_reads_hyphenated_content_type():
    file = parse_file(
        {
            "id": 1,
            "folder_id": 2,
            "display_name": "syllabus.pdf",
            "content-type": "application/pdf",
            "size": 2048,
            "locked": True,
        }
    )
    assert file.content_type == "application/pdf"
    assert file.size == 2048
    assert file.locked is True
    assert file.hidden is False


def test_parse_folder_and_account():
    folder = parse_folder({"id": 3, "parent_folder_id": None, "full_name": "course files/a", "files_count": 4})
    assert folder.parent_folder_id is None
    assert folder.files_count == 4
    assert parse_account({"id": 1, "name": "Root"}).name == "Root"


def test_decode_files_maps_a_whole_page():
    page = Page(index=0, number=1, content=b'[{"id": 1, "filename": "a"}, {"id": 2, "filename": "b"}]')
    assert [file.filename for file in decode_files(page)] == ["a", "b"]


def test_parse_assignment_reads_points_and_dates():
    assignment = parse_assignment(
        {
            "id": 11,
            "course_id": 8,
            "name": "Essay",
            "due_at": "2024-05-01T23:59:00Z",
            "points_possible": 12.5,
            "published": True,
        }
    )
    assert assignment.course_id == 8
    assert assignment.points_possible == 12.5
    assert assignment.due_at == "2024-05-01T23:59:00Z"
    assert assignment.published is True
    assert assignment.lock_at is None


def test_parse_account_reads_hierarchy_fields():
    account = parse_account({"id": "2", "name": "Sub", "parent_account_id": 1, "root_account_id": 1})
    assert account.id == 2
    assert account.parent_account_id == 1
    assert account.sis_account_id is None
