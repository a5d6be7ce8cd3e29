from __future__ import annotations

from collections.abc import Mapping, Sequence

from athena_result_collector.core.models import Page

Step = Page | Exception


class SequencedPager:
    """Replays pages/exceptions in order and records every fetch."""

    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.calls: list[tuple[str, str | None]] = []
        self.reset_calls = 0

    def reset(self) -> None:
        self.reset_calls += 1

    def fetch_page(self, query_execution_id, row_parser, next_token=None):
        self.calls.append((query_execution_id, next_token))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return Page(rows=[row_parser(row) for row in step.rows], next_token=step.next_token)


class AsyncSequencedPager(SequencedPager):
    async def fetch_page(self, query_execution_id, row_parser, next_token=None):
        return SequencedPager.fetch_page(self, query_execution_id, row_parser, next_token)


class RecordingSleeper:
    def __init__(self):
        self.sleeps: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.sleeps.append(seconds)


class AsyncRecordingSleeper(RecordingSleeper):
    async def __call__(self, seconds: float) -> None:
        self.sleeps.append(seconds)


class SequencedQueryResultsClient:
    """boto3-shaped fake returning canned GetQueryResults payloads."""

    def __init__(self, payloads: Sequence[Mapping[str, object] | Exception]):
        self.payloads = list(payloads)
        self.requests: list[dict[str, object]] = []

    def get_query_results(self, **kwargs):
        self.requests.append(dict(kwargs))
        step = self.payloads.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


class AsyncSequencedQueryResultsClient(SequencedQueryResultsClient):
    async def get_query_results(self, **kwargs):
        return SequencedQueryResultsClient.get_query_results(self, **kwargs)
