"""Collector and client configuration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .core.models import Page

ATHENA_MAX_RESULTS_LIMIT = 1000

PageCallback = Callable[[Page, int], object]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(slots=True, frozen=True)
class PagerConfig:
    """Options passed through to the pager."""

    max_results: int | None = None
    skip_header: bool = True

    def validate(self) -> None:
        if self.max_results is not None and not _is_int(self.max_results):
            raise ValueError("pager.max_results must be an integer")
        if self.max_results is not None and not 1 <= self.max_results <= ATHENA_MAX_RESULTS_LIMIT:
            raise ValueError(f"pager.max_results must be between 1 and {ATHENA_MAX_RESULTS_LIMIT}")
        if not isinstance(self.skip_header, bool):
            raise ValueError("pager.skip_header must be bool")


@dataclass(slots=True, frozen=True)
class CollectorConfig:
    """Runtime configuration for result collectors."""

    max_rows: int | None = None
    on_page: PageCallback | None = None
    retry_count: int = 0
    retry_delay_ms: int = 1000

    pager: PagerConfig = field(default_factory=PagerConfig)

    def validate(self) -> None:
        if self.max_rows is not None and not _is_int(self.max_rows):
            raise ValueError("max_rows must be an integer")
        if self.max_rows is not None and self.max_rows < 0:
            raise ValueError("max_rows must be >= 0")
        if self.on_page is not None and not callable(self.on_page):
            raise ValueError("on_page must be callable")
        if not _is_int(self.retry_count):
            raise ValueError("retry_count must be an integer")
        if self.retry_count < 0:
            raise ValueError("retry_count must be >= 0")
        if not _is_int(self.retry_delay_ms):
            raise ValueError("retry_delay_ms must be an integer")
        if self.retry_delay_ms < 0:
            raise ValueError("retry_delay_ms must be >= 0")
        self.pager.validate()


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class AthenaHttpConfig:
    """Settings for the bundled HTTP query-results client."""

    endpoint_url: str = "https://athena.us-east-1.amazonaws.com"
    user_agent: str = "athena-result-collector/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)

    def validate(self) -> None:
        if not self.endpoint_url:
            raise ValueError("endpoint_url must not be empty")
        self.transport.validate()


__all__ = [
    "ATHENA_MAX_RESULTS_LIMIT",
    "PageCallback",
    "PagerConfig",
    "CollectorConfig",
    "TransportConfig",
    "AthenaHttpConfig",
]
