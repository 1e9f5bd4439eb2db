"""Runtime components: REST transport and scanners."""

from .rest import HTTPClient, ResponseAdapter, RestEndpointSpec, RestRunner, RESTTransport
from .scanning import (
    BatchDispatcher,
    CursorPaginator,
    KeyRange,
    RangePartitioner,
    ScanPolicy,
    SequenceScanner,
)

__all__ = [
    "HTTPClient",
    "RESTTransport",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "KeyRange",
    "ScanPolicy",
    "RangePartitioner",
    "CursorPaginator",
    "SequenceScanner",
    "BatchDispatcher",
]
