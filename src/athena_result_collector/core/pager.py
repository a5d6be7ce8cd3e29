"""Single-page fetch against GetQueryResults."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from ..config import PagerConfig
from .errors import AthenaProtocolError
from .models import ColumnInfo, Page, RowParser
from .result_parsing import (
    is_header_row,
    parse_column_info,
    parse_next_token,
    parse_raw_rows,
    to_parsed_row,
)

T = TypeVar("T")

logger = logging.getLogger("athena_result_collector")


class QueryResultsClient(Protocol):
    def get_query_results(self, **kwargs: Any) -> Mapping[str, object]: ...


class Pager(Protocol):
    def fetch_page(
        self,
        query_execution_id: str,
        row_parser: RowParser[T],
        next_token: str | None = None,
    ) -> Page[T]: ...

    def reset(self) -> None: ...


def build_request_kwargs(
    query_execution_id: str,
    *,
    next_token: str | None,
    max_results: int | None,
) -> dict[str, object]:
    kwargs: dict[str, object] = {"QueryExecutionId": query_execution_id}
    if next_token:
        kwargs["NextToken"] = next_token
    if max_results is not None:
        kwargs["MaxResults"] = max_results
    return kwargs


class PagerState:
    """Per-run pager state: cached columns and pending header row."""

    def __init__(self, *, skip_header: bool) -> None:
        self._skip_header = skip_header
        self.columns: tuple[ColumnInfo, ...] = ()
        self._first_page = True

    def reset(self) -> None:
        self.columns = ()
        self._first_page = True

    def build_page(
        self,
        payload: Mapping[str, object],
        row_parser: RowParser[T],
    ) -> Page[T]:
        if not isinstance(payload, Mapping):
            raise AthenaProtocolError("GetQueryResults response must be an object")

        columns = parse_column_info(payload)
        if columns:
            self.columns = columns
        raw_rows = parse_raw_rows(payload)

        if (
            self._first_page
            and self._skip_header
            and raw_rows
            and is_header_row(self.columns, raw_rows[0])
        ):
            raw_rows = raw_rows[1:]

        rows = [row_parser(to_parsed_row(self.columns, values)) for values in raw_rows]
        page = Page(rows=rows, next_token=parse_next_token(payload))
        # A failed build leaves the header pending for the retried fetch.
        self._first_page = False
        return page


class QueryResultPager:
    """Fetches one page of query results per call."""

    def __init__(self, client: QueryResultsClient, config: PagerConfig | None = None) -> None:
        self._client = client
        self._config = config or PagerConfig()
        self._state = PagerState(skip_header=self._config.skip_header)

    @property
    def columns(self) -> tuple[ColumnInfo, ...]:
        return self._state.columns

    def reset(self) -> None:
        self._state.reset()

    def fetch_page(
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
        payload = self._client.get_query_results(**kwargs)
        return self._state.build_page(payload, row_parser)


__all__ = [
    "QueryResultsClient",
    "Pager",
    "PagerState",
    "QueryResultPager",
    "build_request_kwargs",
]
