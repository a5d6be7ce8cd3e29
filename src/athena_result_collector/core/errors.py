"""Error types and status mapping."""

from __future__ import annotations

from collections.abc import Mapping


def extract_error_code(payload: Mapping[str, object] | None) -> str | None:
    """Return the short error code from an Athena JSON error body.

    `__type` may carry a namespace prefix such as
    ``com.amazonaws.athena#InvalidRequestException``.
    """

    if not isinstance(payload, Mapping):
        return None
    value = payload.get("__type")
    if value is None:
        return None
    text = str(value).strip()
    if text == "":
        return None
    return text.rsplit("#", 1)[-1]


def extract_message(payload: Mapping[str, object] | None) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    for key in ("Message", "message"):
        value = payload.get(key)
        if value is not None:
            return str(value)
    return None


class AthenaCollectorError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        error_code: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.error_code = error_code
        self.cause = cause


class AthenaValidationError(AthenaCollectorError):
    """Invalid configuration or arguments."""


class AthenaClientClosedError(AthenaCollectorError):
    """Raised when an HTTP client is used after close."""


class AthenaFetchError(AthenaCollectorError):
    """A single page fetch failed."""


class AthenaTransportError(AthenaFetchError):
    """Network/transport-level failure."""


class AthenaProtocolError(AthenaFetchError):
    """Response shape is not a valid GetQueryResults payload."""


class AthenaRequestError(AthenaFetchError):
    """Request rejected by the service (4xx)."""


class AthenaThrottlingError(AthenaFetchError):
    """Request throttled by the service."""


class AthenaServerError(AthenaFetchError):
    """Server-side unexpected error (5xx)."""


_THROTTLING_CODES = frozenset(
    {
        "TooManyRequestsException",
        "ThrottlingException",
    }
)


def classify_api_error(
    payload: Mapping[str, object] | None,
    *,
    http_status: int | None,
) -> AthenaFetchError | None:
    """Map HTTP status and JSON error body to domain exceptions."""

    if http_status is not None and http_status < 400:
        return None

    error_code = extract_error_code(payload)
    message = extract_message(payload) or "Athena request failed"

    if error_code in _THROTTLING_CODES or http_status == 429:
        return AthenaThrottlingError(
            message,
            http_status=http_status,
            error_code=error_code,
            cause="throttled",
        )
    if error_code == "InternalServerException":
        return AthenaServerError(
            message,
            http_status=http_status,
            error_code=error_code,
            cause="server_transient",
        )
    if http_status is None:
        return AthenaProtocolError(
            "Missing HTTP status",
            error_code=error_code,
        )
    if http_status >= 500:
        return AthenaServerError(
            message,
            http_status=http_status,
            error_code=error_code,
            cause="server_transient",
        )
    return AthenaRequestError(
        message,
        http_status=http_status,
        error_code=error_code,
    )


__all__ = [
    "AthenaCollectorError",
    "AthenaValidationError",
    "AthenaClientClosedError",
    "AthenaFetchError",
    "AthenaTransportError",
    "AthenaProtocolError",
    "AthenaRequestError",
    "AthenaThrottlingError",
    "AthenaServerError",
    "extract_error_code",
    "extract_message",
    "classify_api_error",
]
