"""Runtime layer: signed REST exchanges, pagination and cross-partition fan-out."""

from .fanout import CrossPartitionAggregator, combine_records
from .paging import QueryDriver, QueryPage, QueryRequest, run_query
from .partitions import PartitionRangeResolver
from .rest import CosmosTransport, HTTPClient, HTTPResponse, RestRunner
from .routing import (
    format_partition_key_value,
    partition_key_headers,
    partition_range_headers,
    session_headers,
)

__all__ = [
    "CosmosTransport",
    "CrossPartitionAggregator",
    "HTTPClient",
    "HTTPResponse",
    "PartitionRangeResolver",
    "QueryDriver",
    "QueryPage",
    "QueryRequest",
    "RestRunner",
    "combine_records",
    "format_partition_key_value",
    "partition_key_headers",
    "partition_range_headers",
    "run_query",
    "session_headers",
]
