from __future__ import annotations

import json

import pytest

from canvas_api_client.core.errors import (
    RATE_LIMIT_MESSAGE,
    APIError,
    AuthenticationError,
    CanvasApiError,
    RateLimitExceeded,
    classify_http_error,
    is_auth_error,
    is_rate_limit,
)


def test_auth_error_message_joins_sub_messages():
    assert str(AuthenticationError("test", ["one", "two"])) == "test: one, two"
    assert str(AuthenticationError("", ["one", "two"])) == "one, two"


def test_auth_error_from_payload_reads_status_and_errors():
    err = AuthenticationError.from_payload(
        {"status": "unauthenticated", "errors": [{"message": "a"}, {"message": "b"}]},
        http_status=401,
    )
    assert err.status == "unauthenticated"
    assert err.errors == ("a", "b")
    assert err.http_status == 401


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"errors": {"end_date": "no"}, "message": "error"}, "error"),
        ({"errors": {"end_date": "no"}}, "end_date: no"),
        ({"error": "boom", "sentryId": "42"}, "error status: boom; sentryId: 42"),
    ],
    ids=["message", "end-date", "sentry"],
)
def test_api_error_renders_like_canvas_error_body(payload, expected):
    assert str(APIError.from_payload(payload)) == expected


def test_is_rate_limit_by_type_and_by_message():
    assert is_rate_limit(RateLimitExceeded()) is True
    assert is_rate_limit(None) is False
    assert is_rate_limit(ValueError("nope")) is False
    decoded = CanvasApiError(json.loads(json.dumps({"m": RATE_LIMIT_MESSAGE}))["m"])
    assert is_rate_limit(decoded) is True
    assert is_rate_limit(RuntimeError(f"wrapped: {RATE_LIMIT_MESSAGE}")) is True


def test_is_auth_error():
    assert is_auth_error(AuthenticationError("x")) is True
    assert is_auth_error(APIError("x")) is False


@pytest.mark.parametrize("status", [200, 201, 202, 204])
def test_classify_2xx_is_success(status: int):
    assert classify_http_error(status) is None


@pytest.mark.parametrize("status", [401, 404])
def test_classify_401_and_404_map_to_auth_error(status: int):
    body = json.dumps({"status": "unauthorized", "errors": [{"message": "no"}]}).encode()
    err = classify_http_error(status, body=body)
    assert isinstance(err, AuthenticationError)
    assert err.errors == ("no",)


def test_classify_403_maps_to_rate_limit_with_remaining_quota():
    err = classify_http_error(403, headers={"X-Rate-Limit-Remaining": "12.5"})
    assert isinstance(err, RateLimitExceeded)
    assert err.remaining == "12.5"
    assert str(err) == RATE_LIMIT_MESSAGE


def test_classify_403_without_quota_header():
    err = classify_http_error(403)
    assert isinstance(err, RateLimitExceeded)
    assert err.remaining is None


def test_classify_422_keeps_status_line():
    err = classify_http_error(422, reason="Unprocessable Entity")
    assert isinstance(err, APIError)
    assert str(err) == "422 Unprocessable Entity"


@pytest.mark.parametrize("status", [400, 500, 503])
def test_classify_other_statuses_decode_error_body(status: int):
    err = classify_http_error(status, body=b'{"message": "bad things"}')
    assert isinstance(err, APIError)
    assert str(err) == "bad things"
    assert err.http_status == status


def test_classify_undecodable_body_still_maps_type():
    assert isinstance(classify_http_error(404, body=b"<html>"), AuthenticationError)
    err = classify_http_error(500, reason="Internal Server Error", body=b"<html>")
    assert isinstance(err, APIError)
    assert "500" in str(err)
