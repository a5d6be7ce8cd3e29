"""Core page and result models."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

ParsedRow = dict[str, str | None]
RowParser = Callable[[ParsedRow], T]


@dataclass(slots=True, frozen=True)
class ColumnInfo:
    name: str
    type: str | None = None


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    """One fetched unit of rows.

    `next_token` is present iff more pages exist.
    """

    rows: tuple[T, ...] | list[T] = ()
    next_token: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.rows, tuple):
            return
        object.__setattr__(self, "rows", tuple(self.rows))

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(slots=True, frozen=True)
class CollectResult(Generic[T]):
    rows: tuple[T, ...] | list[T]
    total_rows: int
    page_count: int
    truncated: bool

    def __post_init__(self) -> None:
        if isinstance(self.rows, tuple):
            return
        object.__setattr__(self, "rows", tuple(self.rows))


@dataclass(slots=True, frozen=True)
class BatchResult:
    total_rows: int
    page_count: int


def identity_row_parser(row: ParsedRow) -> ParsedRow:
    return row


__all__ = [
    "ParsedRow",
    "RowParser",
    "ColumnInfo",
    "Page",
    "CollectResult",
    "BatchResult",
    "identity_row_parser",
]
