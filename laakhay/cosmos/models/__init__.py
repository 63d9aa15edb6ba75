"""Data models.

All public models are Pydantic v2 and frozen.
"""

from .options import CreateDocumentOptions, ReplaceDocumentOptions, RequestOptions
from .query import QueryParameter, build_query_body
from .resources import (
    CollectionTarget,
    CosmosCollection,
    PartitionKeyDefinition,
    PartitionKeyRange,
)
from .results import (
    AggregateResult,
    CreateDocumentResult,
    DeleteDocumentResult,
    DeleteResult,
    GetDocumentResult,
    QueryResult,
    ReplaceDocumentResult,
    RequestMetrics,
)

__all__ = [
    "AggregateResult",
    "CollectionTarget",
    "CosmosCollection",
    "CreateDocumentOptions",
    "CreateDocumentResult",
    "DeleteDocumentResult",
    "DeleteResult",
    "GetDocumentResult",
    "PartitionKeyDefinition",
    "PartitionKeyRange",
    "QueryParameter",
    "QueryResult",
    "ReplaceDocumentOptions",
    "ReplaceDocumentResult",
    "RequestMetrics",
    "RequestOptions",
    "build_query_body",
]
