from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from canvas_api_client.core.models import Page, PaginationRequest
from canvas_api_client.core.params import opt
from canvas_api_client.resources.parser import parse_course
from tests.shared.payloads import make_course_payload


def test_pagination_request_options_are_tuple():
    request = PaginationRequest("courses", [opt("search_term", "bio")])  # type: ignore[arg-type]
    assert isinstance(request.options, tuple)
    with pytest.raises(FrozenInstanceError):
        request.per_page = 50  # type: ignore[misc]


def test_pagination_request_rejects_non_positive_per_page():
    with pytest.raises(ValueError):
        PaginationRequest("courses", per_page=0)


def test_page_and_resources_are_immutable():
    page = Page(index=0, number=1, content=b"[]")
    with pytest.raises(FrozenInstanceError):
        page.number = 2  # type: ignore[misc]
    course = parse_course(make_course_payload(1))
    with pytest.raises(FrozenInstanceError):
        course.name = "changed"  # type: ignore[misc]
