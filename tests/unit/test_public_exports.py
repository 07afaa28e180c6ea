from __future__ import annotations

import canvas_api_client
import canvas_api_client.resources as resources


def test_package_exports_clients_errors_and_policies():
    expected = {
        "CanvasClient",
        "AsyncCanvasClient",
        "CanvasClientConfig",
        "AuthenticationError",
        "RateLimitExceeded",
        "is_rate_limit",
        "raise_error",
        "ignore_errors",
    }
    assert expected.issubset(set(canvas_api_client.__all__))
    assert "Paginator" not in canvas_api_client.__all__
    assert not hasattr(canvas_api_client, "Paginator")


def test_resources_package_exports_models_only():
    assert set(resources.__all__) == {"Account", "Assignment", "Course", "User", "File", "Folder"}
    assert not hasattr(resources, "parse_course")
