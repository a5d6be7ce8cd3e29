"""Retry helpers."""

from __future__ import annotations


def can_retry(*, attempt_index: int, retry_count: int) -> bool:
    """Return whether another attempt follows a failure.

    attempt_index: 0-based attempt index. Total attempts are retry_count + 1.
    """

    return attempt_index < retry_count


def retry_delay_seconds(retry_delay_ms: int) -> float:
    """Constant delay between retries; no backoff growth."""

    if retry_delay_ms <= 0:
        return 0.0
    return retry_delay_ms / 1000.0


__all__ = [
    "can_retry",
    "retry_delay_seconds",
]
