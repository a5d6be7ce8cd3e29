from __future__ import annotations

import httpx
import pytest

from athena_result_collector.config import AthenaHttpConfig
from athena_result_collector.core.errors import (
    AthenaClientClosedError,
    AthenaProtocolError,
    AthenaRequestError,
    AthenaServerError,
    AthenaThrottlingError,
    AthenaTransportError,
    AthenaValidationError,
)
from athena_result_collector.core.transport import AthenaHttpClient
from tests.shared.payloads import make_error_payload, make_query_results_payload
from tests.shared.transport import RecordingHandler, build_sync_http_client, json_response


def test_get_query_results_posts_json_protocol_request():
    payload = make_query_results_payload(["id"], [["1"]], next_token="t2")
    handler = RecordingHandler([json_response(200, payload)])
    client = AthenaHttpClient(client=build_sync_http_client(handler))

    result = client.get_query_results(QueryExecutionId="q-1", NextToken="t1", MaxResults=10)

    assert result == payload
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.headers["X-Amz-Target"] == "AmazonAthena.GetQueryResults"
    assert request.headers["Content-Type"] == "application/x-amz-json-1.1"
    assert handler.body(0) == {"QueryExecutionId": "q-1", "NextToken": "t1", "MaxResults": 10}


def test_get_query_results_omits_optional_fields():
    handler = RecordingHandler([json_response(200, make_query_results_payload(["id"], []))])
    client = AthenaHttpClient(client=build_sync_http_client(handler))

    client.get_query_results(QueryExecutionId="q-1")

    assert handler.body(0) == {"QueryExecutionId": "q-1"}


@pytest.mark.parametrize(
    ("response", "expected_exception"),
    [
        (json_response(400, make_error_payload("InvalidRequestException")), AthenaRequestError),
        (json_response(400, make_error_payload("TooManyRequestsException")), AthenaThrottlingError),
        (json_response(500, make_error_payload("InternalServerException")), AthenaServerError),
        (httpx.Response(502, content=b"<html>bad gateway</html>"), AthenaServerError),
        (httpx.Response(200, content=b"not json"), AthenaProtocolError),
        (json_response(200, ["not", "an", "object"]), AthenaProtocolError),
    ],
    ids=["invalid-request", "throttled", "internal", "html-5xx", "non-json", "non-object"],
)
def test_get_query_results_maps_failures(response, expected_exception):
    handler = RecordingHandler([response])
    client = AthenaHttpClient(client=build_sync_http_client(handler))

    with pytest.raises(expected_exception):
        client.get_query_results(QueryExecutionId="q-1")
    assert handler.calls == 1


def test_network_error_maps_to_transport_error_without_retry():
    handler = RecordingHandler([httpx.ConnectError("network down")])
    client = AthenaHttpClient(client=build_sync_http_client(handler))

    with pytest.raises(AthenaTransportError) as excinfo:
        client.get_query_results(QueryExecutionId="q-1")
    assert excinfo.value.cause == "network"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert handler.calls == 1


def test_empty_query_execution_id_is_rejected_before_request():
    handler = RecordingHandler([])
    client = AthenaHttpClient(client=build_sync_http_client(handler))

    with pytest.raises(AthenaValidationError):
        client.get_query_results(QueryExecutionId="")
    assert handler.calls == 0


def test_invalid_config_is_rejected():
    with pytest.raises(AthenaValidationError):
        AthenaHttpClient(AthenaHttpConfig(endpoint_url=""))


def test_closed_client_rejects_requests_and_context_manager():
    handler = RecordingHandler([])
    http_client = build_sync_http_client(handler)
    with AthenaHttpClient(client=http_client) as client:
        pass

    with pytest.raises(AthenaClientClosedError):
        client.get_query_results(QueryExecutionId="q-1")
    with pytest.raises(AthenaClientClosedError):
        client.__enter__()
    assert not http_client.is_closed


def test_owned_http_client_is_closed_with_real_httpx_client():
    client = AthenaHttpClient()
    client.close()
    client.close()


def test_auth_with_injected_client_is_rejected():
    http_client = build_sync_http_client(RecordingHandler([]))

    with pytest.raises(AthenaValidationError, match="auth"):
        AthenaHttpClient(client=http_client, auth=httpx.BasicAuth("user", "secret"))
