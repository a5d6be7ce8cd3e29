"""Shared helpers for sync/async HTTP client implementations."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..config import AthenaHttpConfig
from .errors import AthenaValidationError

GET_QUERY_RESULTS_TARGET = "AmazonAthena.GetQueryResults"
JSON_CONTENT_TYPE = "application/x-amz-json-1.1"


def build_default_headers(config: AthenaHttpConfig) -> Mapping[str, str]:
    return {
        "Accept-Encoding": "gzip",
        "Content-Type": JSON_CONTENT_TYPE,
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: AthenaHttpConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_target_headers(target: str) -> Mapping[str, str]:
    return {"X-Amz-Target": target}


def build_get_query_results_body(
    *,
    query_execution_id: object,
    next_token: object | None,
    max_results: object | None,
) -> dict[str, object]:
    if not isinstance(query_execution_id, str) or query_execution_id == "":
        raise AthenaValidationError("QueryExecutionId must be a non-empty string")
    body: dict[str, object] = {"QueryExecutionId": query_execution_id}
    if next_token is not None:
        body["NextToken"] = next_token
    if max_results is not None:
        body["MaxResults"] = max_results
    return body


def validate_http_config(config: AthenaHttpConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise AthenaValidationError(str(exc)) from exc


__all__ = [
    "GET_QUERY_RESULTS_TARGET",
    "JSON_CONTENT_TYPE",
    "build_default_headers",
    "build_default_timeout",
    "build_target_headers",
    "build_get_query_results_body",
    "validate_http_config",
]
