"""Sync HTTP client for the GetQueryResults operation."""

from __future__ import annotations

import json
import logging
from types import TracebackType

import httpx

from ..config import AthenaHttpConfig
from .errors import (
    AthenaClientClosedError,
    AthenaTransportError,
    AthenaValidationError,
    classify_api_error,
)
from .response_parsing import parse_json_payload
from .transport_shared import (
    GET_QUERY_RESULTS_TARGET,
    build_default_headers,
    build_default_timeout,
    build_get_query_results_body,
    build_target_headers,
    validate_http_config,
)

logger = logging.getLogger("athena_result_collector")


class AthenaHttpClient:
    """Minimal Athena JSON-protocol client.

    Request signing is delegated to ``auth`` (any ``httpx.Auth``). Keyword
    names follow boto3 so either client can back a ``QueryResultPager``.

    An injected ``client`` is used as-is: it must already carry the endpoint
    as ``base_url`` and any auth; ``config.endpoint_url`` is not applied to it.
    """

    def __init__(
        self,
        config: AthenaHttpConfig | None = None,
        *,
        client: httpx.Client | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        self._config = config or AthenaHttpConfig()
        validate_http_config(self._config)
        if client is not None and auth is not None:
            raise AthenaValidationError("auth cannot be combined with an injected client")
        self._closed = False
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self._config.endpoint_url,
            headers=build_default_headers(self._config),
            timeout=build_default_timeout(self._config),
            auth=auth,
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "AthenaHttpClient":
        if self._closed:
            raise AthenaClientClosedError("AthenaHttpClient is already closed")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False

    def get_query_results(
        self,
        *,
        QueryExecutionId: str,  # noqa: N803
        NextToken: str | None = None,  # noqa: N803
        MaxResults: int | None = None,  # noqa: N803
    ) -> dict[str, object]:
        body = build_get_query_results_body(
            query_execution_id=QueryExecutionId,
            next_token=NextToken,
            max_results=MaxResults,
        )
        return self._post(GET_QUERY_RESULTS_TARGET, body)

    def _post(self, target: str, body: dict[str, object]) -> dict[str, object]:
        if self._closed:
            raise AthenaClientClosedError("AthenaHttpClient is already closed")

        headers = {
            **build_default_headers(self._config),
            **build_target_headers(target),
        }
        logger.debug("request start target=%s", target)
        try:
            response = self._client.post("", content=json.dumps(body), headers=headers)
        except httpx.HTTPError as exc:
            logger.error(
                "request network error target=%s error=%s",
                target,
                exc.__class__.__name__,
            )
            raise AthenaTransportError(
                "network/transport error",
                cause="network",
            ) from exc

        http_status = response.status_code
        payload = parse_json_payload(response, http_status=http_status)
        mapped_error = classify_api_error(payload, http_status=http_status)
        if mapped_error is not None:
            logger.error(
                "request failed target=%s http_status=%s error_code=%s",
                target,
                http_status,
                mapped_error.error_code,
            )
            raise mapped_error

        logger.info("request success target=%s http_status=%s", target, http_status)
        return payload


__all__ = [
    "AthenaHttpClient",
]
