from __future__ import annotations

import httpx
import pytest

from athena_result_collector.core.async_transport import AsyncAthenaHttpClient
from athena_result_collector.core.errors import (
    AthenaClientClosedError,
    AthenaRequestError,
    AthenaServerError,
    AthenaTransportError,
    AthenaValidationError,
)
from tests.shared.payloads import make_error_payload, make_query_results_payload
from tests.shared.transport import RecordingHandler, build_async_http_client, json_response


@pytest.mark.asyncio
async def test_async_get_query_results_posts_json_protocol_request():
    payload = make_query_results_payload(["id"], [["1"]])
    handler = RecordingHandler([json_response(200, payload)])
    client = AsyncAthenaHttpClient(client=build_async_http_client(handler))

    result = await client.get_query_results(QueryExecutionId="q-1", MaxResults=5)

    assert result == payload
    assert handler.requests[0].headers["X-Amz-Target"] == "AmazonAthena.GetQueryResults"
    assert handler.body(0) == {"QueryExecutionId": "q-1", "MaxResults": 5}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("step", "expected_exception"),
    [
        (json_response(400, make_error_payload("InvalidRequestException")), AthenaRequestError),
        (json_response(500, make_error_payload("InternalServerException")), AthenaServerError),
        (httpx.ConnectError("network down"), AthenaTransportError),
    ],
    ids=["invalid-request", "internal", "network"],
)
async def test_async_get_query_results_maps_failures(step, expected_exception):
    handler = RecordingHandler([step])
    client = AsyncAthenaHttpClient(client=build_async_http_client(handler))

    with pytest.raises(expected_exception):
        await client.get_query_results(QueryExecutionId="q-1")
    assert handler.calls == 1


@pytest.mark.asyncio
async def test_async_client_rejects_use_after_close():
    handler = RecordingHandler([])
    async with AsyncAthenaHttpClient(client=build_async_http_client(handler)) as client:
        pass

    with pytest.raises(AthenaClientClosedError):
        await client.get_query_results(QueryExecutionId="q-1")


@pytest.mark.asyncio
async def test_async_client_can_initialize_and_close_with_real_httpx_client():
    client = AsyncAthenaHttpClient()
    await client.close()


def test_async_auth_with_injected_client_is_rejected():
    http_client = build_async_http_client(RecordingHandler([]))

    with pytest.raises(AthenaValidationError, match="auth"):
        AsyncAthenaHttpClient(client=http_client, auth=httpx.BasicAuth("user", "secret"))
