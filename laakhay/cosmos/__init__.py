"""Laakhay Cosmos - async access layer for a partitioned document database.

Signs every request, retries transient failures with a fixed backoff,
follows continuation tokens, and fans queries out across partition ranges
when the gateway cannot serve them as one logical result.
"""

from .auth import CosmosCredential, SignedHeaders, sign_request
from .clients import CosmosClient
from .core import (
    AggregationError,
    AuthorizationExpiredError,
    CombineMode,
    CosmosError,
    CredentialError,
    HttpVerb,
    RequestError,
    ResourceType,
    ServiceBusyError,
    TransientError,
)
from .models import (
    AggregateResult,
    CollectionTarget,
    CosmosCollection,
    CreateDocumentOptions,
    CreateDocumentResult,
    DeleteDocumentResult,
    DeleteResult,
    GetDocumentResult,
    PartitionKeyRange,
    QueryParameter,
    QueryResult,
    ReplaceDocumentOptions,
    ReplaceDocumentResult,
    RequestOptions,
)
from .runtime import (
    CosmosTransport,
    CrossPartitionAggregator,
    PartitionRangeResolver,
    QueryDriver,
    QueryRequest,
)
from .utils import DEFAULT_RETRY_POLICY, RetryPolicy, retry_async

__version__ = "0.1.0"

__all__ = [
    "AggregateResult",
    "AggregationError",
    "AuthorizationExpiredError",
    "CollectionTarget",
    "CombineMode",
    "CosmosClient",
    "CosmosCollection",
    "CosmosCredential",
    "CosmosError",
    "CosmosTransport",
    "CreateDocumentOptions",
    "CreateDocumentResult",
    "CredentialError",
    "CrossPartitionAggregator",
    "DEFAULT_RETRY_POLICY",
    "DeleteDocumentResult",
    "DeleteResult",
    "GetDocumentResult",
    "HttpVerb",
    "PartitionKeyRange",
    "PartitionRangeResolver",
    "QueryDriver",
    "QueryParameter",
    "QueryRequest",
    "QueryResult",
    "ReplaceDocumentOptions",
    "ReplaceDocumentResult",
    "RequestError",
    "RequestOptions",
    "ResourceType",
    "RetryPolicy",
    "ServiceBusyError",
    "SignedHeaders",
    "TransientError",
    "retry_async",
    "sign_request",
]
