"""Async single-page fetch against GetQueryResults."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from ..config import PagerConfig
from .models import ColumnInfo, Page, RowParser
from .pager import PagerState, build_request_kwargs

T = TypeVar("T")

logger = logging.getLogger("athena_result_collector")


class AsyncQueryResultsClient(Protocol):
    async def get_query_results(self, **kwargs: Any) -> Mapping[str, object]: ...


class AsyncPager(Protocol):
    async def fetch_page(
        self,
        query_execution_id: str,
        row_parser: RowParser[T],
        next_token: str | None = None,
    ) -> Page[T]: ...

    def reset(self) -> None: ...


class AsyncQueryResultPager:
    """Fetches one page of query results per call (async)."""

    def __init__(
        self,
        client: AsyncQueryResultsClient,
        config: PagerConfig | None = None,
    ) -> None:
        self._client = client
        self._config = config or PagerConfig()
        self._state = PagerState(skip_header=self._config.skip_header)

    @property
    def columns(self) -> tuple[ColumnInfo, ...]:
        return self._state.columns

    def reset(self) -> None:
        self._state.reset()

    async def fetch_page(
        self,
        query_execution_id: str,
        row_parser: RowParser[T],
        next_token: str | None = None,
    ) -> Page[T]:
        kwargs = build_request_kwargs(
            query_execution_id,
            next_token=next_token,
            max_results=self._config.max_results,
        )
        logger.debug(
            "page fetch query_execution_id=%s has_token=%s",
            query_execution_id,
            next_token is not None,
        )
        payload = await self._client.get_query_results(**kwargs)
        return self._state.build_page(payload, row_parser)


__all__ = [
    "AsyncQueryResultsClient",
    "AsyncPager",
    "AsyncQueryResultPager",
]
