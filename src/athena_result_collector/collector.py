"""Public sync collector entrypoint."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from typing import TypeVar

from .collector_shared import (
    batch_limit_reached,
    stream_limit_reached,
    take_within_limit,
    validate_collector_config,
)
from .config import CollectorConfig
from .core.models import BatchResult, CollectResult, Page, ParsedRow, RowParser, identity_row_parser
from .core.pager import Pager, QueryResultPager, QueryResultsClient
from .core.retry import can_retry, retry_delay_seconds

T = TypeVar("T")

logger = logging.getLogger("athena_result_collector")


class ResultCollector:
    """Collects every page of a finished query's results.

    Pages are fetched strictly in order. The pager is reset at the start of
    each call, so one instance must not serve overlapping calls.
    """

    def __init__(
        self,
        client: QueryResultsClient | None = None,
        config: CollectorConfig | None = None,
        *,
        pager: Pager | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self._config = config or CollectorConfig()
        validate_collector_config(self._config)
        if pager is None:
            if client is None:
                raise TypeError("either client or pager is required")
            pager = QueryResultPager(client, self._config.pager)
        self._pager = pager
        self._sleep = sleeper or time.sleep

    @property
    def config(self) -> CollectorConfig:
        return self._config

    @property
    def pager(self) -> Pager:
        """The underlying pager, for advanced direct use."""
        return self._pager

    def collect(self, query_execution_id: str) -> CollectResult[ParsedRow]:
        return self.collect_with(query_execution_id, identity_row_parser)

    def collect_with(
        self,
        query_execution_id: str,
        row_parser: RowParser[T],
    ) -> CollectResult[T]:
        max_rows = self._config.max_rows
        on_page = self._config.on_page
        rows: list[T] = []
        next_token: str | None = None
        page_count = 0
        truncated = False

        self._pager.reset()

        while True:
            page = self._fetch_page_with_retry(query_execution_id, row_parser, next_token)
            page_count += 1

            accepted, truncated = take_within_limit(
                page.rows,
                collected=len(rows),
                max_rows=max_rows,
            )
            rows.extend(accepted)
            if truncated:
                break

            if on_page is not None:
                on_page(page, len(rows))

            next_token = page.next_token
            if not next_token:
                break

        logger.info(
            "collect done query_execution_id=%s rows=%s pages=%s truncated=%s",
            query_execution_id,
            len(rows),
            page_count,
            truncated,
        )
        return CollectResult(
            rows=rows,
            total_rows=len(rows),
            page_count=page_count,
            truncated=truncated,
        )

    def stream(self, query_execution_id: str, row_parser: RowParser[T]) -> Iterator[T]:
        max_rows = self._config.max_rows
        next_token: str | None = None
        count = 0

        self._pager.reset()

        while True:
            page = self._fetch_page_with_retry(query_execution_id, row_parser, next_token)
            for row in page.rows:
                if stream_limit_reached(count, max_rows):
                    return
                yield row
                count += 1

            next_token = page.next_token
            if not next_token:
                return

    def process_batches(
        self,
        query_execution_id: str,
        row_parser: RowParser[T],
        batch_processor: Callable[[list[T], int], object],
    ) -> BatchResult:
        max_rows = self._config.max_rows
        next_token: str | None = None
        page_count = 0
        total_rows = 0

        self._pager.reset()

        while True:
            page = self._fetch_page_with_retry(query_execution_id, row_parser, next_token)
            batch_processor(list(page.rows), page_count)

            page_count += 1
            total_rows += page.row_count

            if batch_limit_reached(total_rows, max_rows):
                break

            next_token = page.next_token
            if not next_token:
                break

        logger.info(
            "process_batches done query_execution_id=%s rows=%s pages=%s",
            query_execution_id,
            total_rows,
            page_count,
        )
        return BatchResult(total_rows=total_rows, page_count=page_count)

    def _fetch_page_with_retry(
        self,
        query_execution_id: str,
        row_parser: RowParser[T],
        next_token: str | None,
    ) -> Page[T]:
        retry_count = self._config.retry_count
        attempt = 0
        while True:
            try:
                page = self._pager.fetch_page(query_execution_id, row_parser, next_token)
            except Exception as exc:
                if not can_retry(attempt_index=attempt, retry_count=retry_count):
                    logger.error(
                        "page fetch failed; giving up query_execution_id=%s attempt=%s error=%s",
                        query_execution_id,
                        attempt + 1,
                        exc.__class__.__name__,
                    )
                    raise
                logger.warning(
                    "page fetch failed; retrying query_execution_id=%s attempt=%s error=%s",
                    query_execution_id,
                    attempt + 1,
                    exc.__class__.__name__,
                )
                self._sleep(retry_delay_seconds(self._config.retry_delay_ms))
                attempt += 1
                continue

            logger.debug(
                "page fetched query_execution_id=%s rows=%s has_next=%s",
                query_execution_id,
                page.row_count,
                bool(page.next_token),
            )
            return page


__all__ = [
    "ResultCollector",
]
