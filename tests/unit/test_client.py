from __future__ import annotations

import pytest

from canvas_api_client import CanvasClient, ignore_errors
from canvas_api_client.config import CanvasClientConfig
from canvas_api_client.core.errors import (
    AuthenticationError,
    CanvasClientClosedError,
    CanvasValidationError,
    RateLimitExceeded,
)
from canvas_api_client.core.params import ACTIVE_COURSES, include_opt
from canvas_api_client.resources.models import Account, Assignment, Course, User
from tests.shared.mock_server import CanvasCollectionServer, build_sync_transport
from tests.shared.transport import build_config


def test_client_context_manager_closes_transport():
    transport = build_sync_transport(CanvasCollectionServer(total_pages=1))
    with CanvasClient(config=build_config(), transport=transport) as client:
        assert client is not None
    assert transport.closed is True


def test_client_raises_when_used_after_close():
    client = CanvasClient(
        config=build_config(),
        transport=build_sync_transport(CanvasCollectionServer(total_pages=1)),
    )
    client.close()
    client.close()
    with pytest.raises(CanvasClientClosedError):
        client.list_courses()
    with pytest.raises(CanvasClientClosedError):
        client.current_user()


def test_client_rejects_invalid_config():
    with pytest.raises(CanvasValidationError):
        CanvasClient(config=CanvasClientConfig(host=""))


def test_list_courses_collects_every_page():
    server = CanvasCollectionServer(total_pages=6, items_per_page=3)
    with CanvasClient(config=build_config(max_workers=3), transport=build_sync_transport(server)) as client:
        courses = client.list_courses()

    assert len(courses) == 18
    assert all(isinstance(course, Course) for course in courses)
    assert len({course.id for course in courses}) == 18
    assert server.pages_requested == [1, 2, 3, 4, 5, 6]


def test_options_and_per_page_reach_the_wire():
    server = CanvasCollectionServer(total_pages=2)
    with CanvasClient(config=build_config(per_page=50), transport=build_sync_transport(server)) as client:
        list(client.courses(ACTIVE_COURSES, include_opt("term")))

    for request in server.requests:
        assert request.url.params["per_page"] == "50"
        assert request.url.params.get_list("include[]") == ["term"]
        assert request.url.params["enrollment_state"] == "active"


def test_course_users_streams_from_nested_path():
    server = CanvasCollectionServer(total_pages=2, items_per_page=2)
    with CanvasClient(config=build_config(), transport=build_sync_transport(server)) as client:
        users = list(client.course_users(12))

    assert len(users) == 4
    assert all(isinstance(user, User) for user in users)
    assert {request.url.path for request in server.requests} == {"/api/v1/courses/12/users"}


def test_get_course_and_current_user():
    server = CanvasCollectionServer(total_pages=1)
    with CanvasClient(config=build_config(), transport=build_sync_transport(server)) as client:
        course = client.get_course(42)
        user = client.current_user()

    assert course.id == 42
    assert course.name == "Course 42"
    assert user.id == 7
    assert user.login_id == "self"


def test_bad_token_surfaces_authentication_error():
    server = CanvasCollectionServer(total_pages=3)
    transport = build_sync_transport(server, build_config(token="wrong"))
    with CanvasClient(config=build_config(token="wrong"), transport=transport) as client:
        with pytest.raises(AuthenticationError) as excinfo:
            client.list_courses()

    assert excinfo.value.errors == ("user authorization required",)
    assert server.pages_requested == [1]


def test_set_token_applies_to_later_requests():
    server = CanvasCollectionServer(total_pages=1)
    config = build_config(token="wrong")
    with CanvasClient(config=config, transport=build_sync_transport(server, config)) as client:
        with pytest.raises(AuthenticationError):
            client.current_user()
        client.set_token("test-token")
        assert client.current_user().id == 7


def test_client_error_policy_is_used_when_no_policy_given():
    server = CanvasCollectionServer(total_pages=4, items_per_page=2, rate_limited_pages=frozenset({3}))
    with CanvasClient(
        config=build_config(),
        transport=build_sync_transport(server),
        error_policy=ignore_errors,
    ) as client:
        courses = list(client.courses())
        with pytest.raises(RateLimitExceeded):
            client.list_courses()

    assert len(courses) == 6


def test_course_assignments_streams_from_nested_path():
    server = CanvasCollectionServer(total_pages=3, items_per_page=2)
    with CanvasClient(config=build_config(), transport=build_sync_transport(server)) as client:
        assignments = client.list_course_assignments(8)

    assert len(assignments) == 6
    assert all(isinstance(assignment, Assignment) for assignment in assignments)
    assert {request.url.path for request in server.requests} == {"/api/v1/courses/8/assignments"}


def test_account_collections_hit_their_endpoints():
    server = CanvasCollectionServer(total_pages=2, items_per_page=1)
    with CanvasClient(config=build_config(), transport=build_sync_transport(server)) as client:
        accounts = client.list_accounts()
        course_accounts = list(client.course_accounts())
        found = list(client.search_accounts("state university"))
        account_courses = list(client.account_courses(4))

    assert all(isinstance(account, Account) for account in accounts + course_accounts + found)
    assert len(accounts) == len(course_accounts) == len(found) == 2
    assert all(isinstance(course, Course) for course in account_courses)
    paths = {request.url.path for request in server.requests}
    assert paths == {
        "/api/v1/accounts",
        "/api/v1/course_accounts",
        "/api/v1/accounts/search",
        "/api/v1/accounts/4/courses",
    }
    searches = [r for r in server.requests if r.url.path == "/api/v1/accounts/search"]
    assert all(r.url.params["name"] == "state university" for r in searches)


def test_current_account():
    server = CanvasCollectionServer(total_pages=1)
    with CanvasClient(config=build_config(), transport=build_sync_transport(server)) as client:
        account = client.current_account()

    assert account.id == 1
    assert account.name == "Root Account"
    assert account.workflow_state == "active"
