"""Public package exports for the Athena result collector."""

from .async_collector import AsyncResultCollector
from .collector import ResultCollector
from .config import AthenaHttpConfig, CollectorConfig, PagerConfig, TransportConfig
from .core.async_pager import AsyncQueryResultPager
from .core.async_transport import AsyncAthenaHttpClient
from .core.errors import AthenaCollectorError, AthenaFetchError, AthenaValidationError
from .core.models import BatchResult, CollectResult, ColumnInfo, Page, ParsedRow, RowParser
from .core.pager import QueryResultPager
from .core.transport import AthenaHttpClient

__all__ = [
    "ResultCollector",
    "AsyncResultCollector",
    "CollectorConfig",
    "PagerConfig",
    "TransportConfig",
    "AthenaHttpConfig",
    "QueryResultPager",
    "AsyncQueryResultPager",
    "AthenaHttpClient",
    "AsyncAthenaHttpClient",
    "Page",
    "ColumnInfo",
    "CollectResult",
    "BatchResult",
    "ParsedRow",
    "RowParser",
    "AthenaCollectorError",
    "AthenaFetchError",
    "AthenaValidationError",
]
