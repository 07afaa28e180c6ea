from __future__ import annotations

import pytest

from canvas_api_client.core.errors import DecodeError
from canvas_api_client.core.response_parsing import (
    parse_json_object,
    parse_json_payload,
    response_error,
    to_page,
)
from tests.shared.transport import Response


def test_parse_json_payload_tags_page_index_on_failure():
    with pytest.raises(DecodeError) as excinfo:
        parse_json_payload(b"{", page_index=4)
    assert excinfo.value.page_index == 4


def test_parse_json_object_rejects_non_dict_root():
    with pytest.raises(DecodeError, match="response JSON root must be an object"):
        parse_json_object(b"[1, 2, 3]")


def test_parse_json_object_returns_dict_payload():
    assert parse_json_object(b'{"id": 1}') == {"id": 1}


def test_response_error_is_none_for_success():
    assert response_error(Response(200, [])) is None


def test_to_page_keeps_body_and_headers():
    page = to_page(Response(200, [1], headers={"Link": "<x>"}), number=2)
    assert page.index == 1
    assert page.content == b"[1]"
    assert page.link_header == "<x>"
