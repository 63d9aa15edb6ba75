"""Cosmos client.

This client exposes every database, collection, document and query
operation behind one object that owns the signing credential, the HTTP
session and the default retry policy.

Architecture:
    Single-exchange operations look up an endpoint spec and adapter in the
    endpoint registry and run them through RestRunner. Queries go through
    QueryDriver (single partition, via the gateway) or
    CrossPartitionAggregator (every partition range, combined locally).
"""

from __future__ import annotations

from typing import Any

from laakhay.cosmos.auth import CosmosCredential
from laakhay.cosmos.config import DEFAULT_MAX_CONCURRENT_RANGES, DEFAULT_TIMEOUT
from laakhay.cosmos.connectors import get_endpoint_adapter, get_endpoint_spec
from laakhay.cosmos.core.enums import CombineMode
from laakhay.cosmos.models import (
    AggregateResult,
    CollectionTarget,
    CosmosCollection,
    CreateDocumentOptions,
    CreateDocumentResult,
    DeleteDocumentResult,
    DeleteResult,
    GetDocumentResult,
    QueryParameter,
    QueryResult,
    ReplaceDocumentOptions,
    ReplaceDocumentResult,
    RequestOptions,
)
from laakhay.cosmos.runtime import (
    CosmosTransport,
    CrossPartitionAggregator,
    PartitionRangeResolver,
    QueryDriver,
    QueryRequest,
    RestRunner,
    partition_key_headers,
    session_headers,
)
from laakhay.cosmos.runtime.rest import HTTPClient
from laakhay.cosmos.utils import DEFAULT_RETRY_POLICY, RetryPolicy

QueryParameters = list[QueryParameter] | list[dict[str, Any]] | None


def _coerce_parameters(parameters: QueryParameters) -> list[QueryParameter]:
    if not parameters:
        return []
    return [p if isinstance(p, QueryParameter) else QueryParameter(**p) for p in parameters]


class CosmosClient:
    """Async client for one database account."""

    def __init__(
        self,
        base_url: str,
        *,
        master_key: str | None = None,
        credential: CosmosCredential | None = None,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        timeout: float = DEFAULT_TIMEOUT,
        max_concurrent_ranges: int = DEFAULT_MAX_CONCURRENT_RANGES,
        http: HTTPClient | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Account URL, e.g. ``https://myaccount.documents.azure.com``
            master_key: Base64 master key; ignored when ``credential`` is given
            credential: Pre-built signing credential
            retry_policy: Default policy for every request
            timeout: Total timeout per HTTP exchange (seconds)
            max_concurrent_ranges: Cap on partition ranges queried at once
            http: Optional pre-built HTTP client

        Raises:
            ValueError: If neither ``master_key`` nor ``credential`` is given
            CredentialError: If ``master_key`` is not valid base64
        """
        if credential is None:
            if master_key is None:
                raise ValueError("Either master_key or credential must be provided")
            credential = CosmosCredential.from_master_key(master_key)

        self.base_url = base_url.rstrip("/")
        self.retry_policy = retry_policy
        self._transport = CosmosTransport(self.base_url, credential, timeout=timeout, http=http)
        self._runner = RestRunner(self._transport, retry_policy)
        self._driver = QueryDriver(self._transport, retry_policy)
        self._resolver = PartitionRangeResolver(self._transport, retry_policy)
        self._aggregator = CrossPartitionAggregator(
            self._resolver, self._driver, max_concurrent_ranges=max_concurrent_ranges
        )

    async def fetch(
        self,
        endpoint_id: str,
        params: dict[str, Any],
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> Any:
        """Run a registered single-exchange endpoint.

        Args:
            endpoint_id: Endpoint identifier (e.g., "get_document")
            params: Request parameters

        Returns:
            Parsed response from the endpoint adapter

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        return await self._runner.run(
            spec=spec, adapter=adapter_cls(), params=params, retry_policy=retry_policy
        )

    # --- Databases -------------------------------------------------------

    async def list_databases(self, *, retry_policy: RetryPolicy | None = None) -> list[str]:
        """Return the names of the account's databases."""
        return await self.fetch("list_databases", {}, retry_policy=retry_policy)

    async def create_database(
        self, database: str, *, retry_policy: RetryPolicy | None = None
    ) -> None:
        await self.fetch("create_database", {"database": database}, retry_policy=retry_policy)

    async def delete_database(
        self, database: str, *, retry_policy: RetryPolicy | None = None
    ) -> DeleteResult:
        """Delete a database. ``did_delete`` is False if it did not exist."""
        return await self.fetch("delete_database", {"database": database}, retry_policy=retry_policy)

    # --- Collections -----------------------------------------------------

    async def list_collections(
        self, database: str, *, retry_policy: RetryPolicy | None = None
    ) -> list[str]:
        """Return the names of the collections in ``database``."""
        return await self.fetch("list_collections", {"database": database}, retry_policy=retry_policy)

    async def create_collection(
        self, database: str, collection: str, *, retry_policy: RetryPolicy | None = None
    ) -> None:
        """Create a collection partitioned on ``/partitionKey``."""
        await self.fetch(
            "create_collection",
            {"database": database, "collection": collection},
            retry_policy=retry_policy,
        )

    async def get_collection(
        self, database: str, collection: str, *, retry_policy: RetryPolicy | None = None
    ) -> CosmosCollection:
        """Return partition key information for a collection."""
        return await self.fetch(
            "get_collection",
            {"target": CollectionTarget(database=database, collection=collection)},
            retry_policy=retry_policy,
        )

    async def delete_collection(
        self, database: str, collection: str, *, retry_policy: RetryPolicy | None = None
    ) -> DeleteResult:
        return await self.fetch(
            "delete_collection",
            {"target": CollectionTarget(database=database, collection=collection)},
            retry_policy=retry_policy,
        )

    # --- Documents -------------------------------------------------------

    async def create_document(
        self,
        database: str,
        collection: str,
        partition: str,
        document: dict[str, Any],
        options: CreateDocumentOptions | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> CreateDocumentResult:
        """Create (or with ``upsert``, create-or-replace) a document.

        The stored document's ``partitionKey`` field is set to ``partition``.
        The caller's dict is left untouched.
        """
        return await self.fetch(
            "create_document",
            {
                "target": CollectionTarget(database=database, collection=collection),
                "partition": partition,
                "document": document,
                "options": options or CreateDocumentOptions(),
            },
            retry_policy=retry_policy,
        )

    async def get_document(
        self,
        database: str,
        collection: str,
        partition: str,
        document_id: str,
        options: RequestOptions | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> GetDocumentResult:
        """Fetch a document by id. ``doc`` is None if it does not exist."""
        return await self.fetch(
            "get_document",
            {
                "target": CollectionTarget(database=database, collection=collection),
                "partition": partition,
                "document_id": document_id,
                "options": options or RequestOptions(),
            },
            retry_policy=retry_policy,
        )

    async def replace_document(
        self,
        database: str,
        collection: str,
        partition: str,
        document: dict[str, Any],
        options: ReplaceDocumentOptions | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> ReplaceDocumentResult:
        """Replace a document.

        ``did_replace`` is False when ``options.if_match`` no longer matches
        the stored version; any other failure raises.
        """
        if "id" not in document:
            raise ValueError("Document to replace must have an 'id'")
        return await self.fetch(
            "replace_document",
            {
                "target": CollectionTarget(database=database, collection=collection),
                "partition": partition,
                "document": document,
                "document_id": str(document["id"]),
                "options": options or ReplaceDocumentOptions(),
            },
            retry_policy=retry_policy,
        )

    async def delete_document(
        self,
        database: str,
        collection: str,
        partition: str,
        document_id: str,
        options: RequestOptions | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> DeleteDocumentResult:
        """Delete a document. ``did_delete`` is False if it did not exist."""
        return await self.fetch(
            "delete_document",
            {
                "target": CollectionTarget(database=database, collection=collection),
                "partition": partition,
                "document_id": document_id,
                "options": options or RequestOptions(),
            },
            retry_policy=retry_policy,
        )

    # --- Queries ---------------------------------------------------------

    async def query_documents_gateway(
        self,
        database: str,
        collection: str,
        partition: str,
        query: str,
        parameters: QueryParameters = None,
        options: RequestOptions | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> QueryResult:
        """Run a query confined to one logical partition through the gateway.

        Use this for plain selections. Queries needing state across pages
        (ORDER BY, TOP, aggregates, DISTINCT, GROUP BY) over several
        partitions belong in ``query_documents_containers_direct``.
        """
        options = options or RequestOptions()
        request = QueryRequest(
            target=CollectionTarget(database=database, collection=collection),
            query=query,
            parameters=tuple(_coerce_parameters(parameters)),
            routing_headers={
                **partition_key_headers(partition),
                **session_headers(options.session_token),
            },
        )
        return await self._driver.run(request, retry_policy=retry_policy)

    async def query_documents_containers_direct(
        self,
        database: str,
        collection: str,
        query: str,
        parameters: QueryParameters = None,
        combine_mode: CombineMode | str = CombineMode.CONCAT_ARRAYS,
        options: RequestOptions | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> AggregateResult:
        """Run a query against every partition range and combine the results.

        Args:
            database: Database name
            collection: Collection name
            query: Query text. For ``sum`` use ``SELECT VALUE SUM(d.field)``.
            parameters: Values substituted into the query
            combine_mode: ``concatArrays`` or ``sum``
            options: Optional session token

        Returns:
            AggregateResult with the combined data
        """
        options = options or RequestOptions()
        return await self._aggregator.query(
            CollectionTarget(database=database, collection=collection),
            query,
            _coerce_parameters(parameters),
            CombineMode(combine_mode),
            session_token=options.session_token,
            retry_policy=retry_policy,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._transport.close()

    async def __aenter__(self) -> CosmosClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
