"""Continuation-token driven query execution.

This module provides the QueryDriver class which fetches a query page by
page, following continuation tokens until the service reports no more.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from time import perf_counter

from ...config import CONTENT_TYPE_QUERY, HEADER_CONTINUATION
from ...core.enums import HttpVerb, ResourceType
from ...core.exceptions import RequestError
from ...models.query import build_query_body
from ...models.results import QueryResult
from ...models.schemas import QueryPageBody
from ...utils.retry import DEFAULT_RETRY_POLICY, RetryPolicy, retry_async
from ..rest.transport import (
    CosmosTransport,
    continuation_token,
    request_charge,
    request_duration_ms,
)
from .definitions import PageAccumulator, QueryPage, QueryRequest
from .telemetry import log_page_completed, log_page_error, log_query_complete


class QueryDriver:
    """Runs a query to completion, one retried page at a time.

    Pages are fetched strictly in order because each continuation token comes
    from the previous response. A transient failure only repeats the page it
    hit; pages already received are kept.
    """

    def __init__(
        self, transport: CosmosTransport, retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    ) -> None:
        """Initialize query driver.

        Args:
            transport: Signed transport used for every page request
            retry_policy: Default policy applied to each page fetch
        """
        self._t = transport
        self._retry_policy = retry_policy

    async def iter_pages(
        self,
        request: QueryRequest,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> AsyncIterator[QueryPage]:
        """Yield pages lazily until no continuation token is returned.

        Args:
            request: Query and routing description
            retry_policy: Override for the driver's default policy

        Yields:
            QueryPage instances in service order
        """
        policy = retry_policy or self._retry_policy
        continuation: str | None = None
        page_index = 0

        while True:
            page_start = perf_counter()
            try:
                page = await retry_async(
                    lambda: self._fetch_page(request, continuation, page_index),
                    policy,
                    description=f"query:{request.target}:{request.label}",
                )
            except Exception as e:
                log_page_error(
                    target=str(request.target),
                    label=request.label,
                    page_index=page_index,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            log_page_completed(
                target=str(request.target),
                label=request.label,
                page=page,
                latency_ms=(perf_counter() - page_start) * 1000.0,
            )
            yield page

            if page.is_last:
                return
            continuation = page.continuation
            page_index += 1

    async def run(
        self,
        request: QueryRequest,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> QueryResult:
        """Fetch every page and fold them into one result.

        Records keep page order and, within a page, service order. Nothing is
        returned if any page fails permanently.

        Returns:
            QueryResult with all records and summed charge and duration
        """
        start = perf_counter()
        totals = PageAccumulator()
        async for page in self.iter_pages(request, retry_policy=retry_policy):
            totals.add(page)

        log_query_complete(
            target=str(request.target),
            label=request.label,
            totals=totals,
            total_latency_ms=(perf_counter() - start) * 1000.0,
        )
        return QueryResult(
            records=totals.records,
            request_charge=totals.request_charge,
            request_duration_ms=totals.request_duration_ms,
        )

    async def _fetch_page(
        self, request: QueryRequest, continuation: str | None, page_index: int
    ) -> QueryPage:
        headers = dict(request.routing_headers)
        if continuation:
            headers[HEADER_CONTINUATION] = continuation

        response = await self._t.send(
            verb=HttpVerb.POST,
            resource_type=ResourceType.DOCUMENT,
            resource_link=request.target.resource_link,
            path=request.target.docs_path,
            headers=headers,
            json_body=build_query_body(request.query, list(request.parameters)),
            content_type=CONTENT_TYPE_QUERY,
        )

        if not response.ok:
            raise RequestError(
                f"Unable to query collection {request.target} ({request.label})",
                method=HttpVerb.POST.value,
                path=request.target.docs_path,
                status_code=response.status,
                body=response.text,
            )

        body = QueryPageBody.model_validate(response.json() or {})
        return QueryPage(
            records=body.documents,
            continuation=continuation_token(response),
            request_charge=request_charge(response),
            request_duration_ms=request_duration_ms(response),
            page_index=page_index,
        )


async def run_query(
    transport: CosmosTransport,
    request: QueryRequest,
    *,
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> QueryResult:
    """Convenience wrapper running ``request`` with a one-off QueryDriver."""
    return await QueryDriver(transport, retry_policy).run(request)
