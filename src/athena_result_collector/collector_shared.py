"""Shared helpers for sync/async collectors."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .config import CollectorConfig
from .core.errors import AthenaValidationError

T = TypeVar("T")


def validate_collector_config(config: CollectorConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise AthenaValidationError(str(exc)) from exc


def take_within_limit(
    rows: Sequence[T],
    *,
    collected: int,
    max_rows: int | None,
) -> tuple[Sequence[T], bool]:
    """Return the rows to append and whether the limit cut the page.

    A page whose size reaches the remaining budget is the last one, even
    when the slice covers it entirely.
    """

    if max_rows is None:
        return rows, False
    remaining = max_rows - collected
    if len(rows) >= remaining:
        return rows[: max(remaining, 0)], True
    return rows, False


def stream_limit_reached(count: int, max_rows: int | None) -> bool:
    return max_rows is not None and count >= max_rows


def batch_limit_reached(total_rows: int, max_rows: int | None) -> bool:
    return max_rows is not None and total_rows >= max_rows


__all__ = [
    "validate_collector_config",
    "take_within_limit",
    "stream_limit_reached",
    "batch_limit_reached",
]
