from __future__ import annotations

import pytest

from canvas_api_client.core.async_pagination import apaginate
from canvas_api_client.core.async_transport import AsyncTransport
from canvas_api_client.core.decoding import raw_json_decoder
from canvas_api_client.core.errors import AuthenticationError
from canvas_api_client.core.models import PaginationRequest
from canvas_api_client.core.pagination import paginate
from canvas_api_client.core.transport import SyncTransport
from tests.shared.mock_server import build_async_transport, build_sync_transport
from tests.shared.transport import AsyncSequencedClient, Response, SyncSequencedClient, build_config


class RecordingPolicy:
    def __init__(self):
        self.errors: list[Exception] = []

    def __call__(self, error: Exception) -> Exception | None:
        self.errors.append(error)
        return None


@pytest.mark.asyncio
async def test_sync_async_collect_the_same_items(collection_server):
    request = PaginationRequest("courses")
    sync_items = list(paginate(build_sync_transport(collection_server(9, items_per_page=3)), request, raw_json_decoder))
    stream = await apaginate(build_async_transport(collection_server(9, items_per_page=3)), request, raw_json_decoder)
    async_items = [item async for item in stream]

    assert sorted(item["id"] for item in sync_items) == sorted(item["id"] for item in async_items)


@pytest.mark.asyncio
async def test_sync_async_report_the_same_errors(collection_server):
    request = PaginationRequest("courses")
    sync_policy = RecordingPolicy()
    async_policy = RecordingPolicy()
    overrides = {"rate_limited_pages": frozenset({2}), "status_overrides": {5: 500}}

    list(paginate(build_sync_transport(collection_server(6, **overrides)), request, raw_json_decoder, policy=sync_policy))
    stream = await apaginate(
        build_async_transport(collection_server(6, **overrides)),
        request,
        raw_json_decoder,
        policy=async_policy,
    )
    [item async for item in stream]

    def _kinds(errors: list[Exception]) -> list[str]:
        return sorted(error.__class__.__name__ for error in errors)

    assert _kinds(sync_policy.errors) == _kinds(async_policy.errors) == ["APIError", "RateLimitExceeded"]


@pytest.mark.asyncio
async def test_sync_async_transport_error_equivalence():
    payload = {"status": "unauthenticated", "errors": [{"message": "bad token"}]}
    sync_transport = SyncTransport(build_config(), client=SyncSequencedClient([Response(401, payload)]))
    async_transport = AsyncTransport(build_config(), client=AsyncSequencedClient([Response(401, payload)]))

    with pytest.raises(AuthenticationError) as sync_exc:
        sync_transport.get("courses")
    with pytest.raises(AuthenticationError) as async_exc:
        await async_transport.get("courses")

    assert str(sync_exc.value) == str(async_exc.value) == "unauthenticated: bad token"
