"""Cross-partition query fan-out and aggregation.

Architecture:
    Queries that need state across pages (ORDER BY, TOP, OFFSET/LIMIT,
    aggregates, DISTINCT, GROUP BY) cannot be served across partitions by
    the gateway. Instead the query is sent to every physical partition range
    directly and the per-range results are combined here:

    1. Resolve the collection's current ranges (one retried lookup).
    2. Run one QueryDriver per range, at most ``max_concurrent_ranges`` at
       a time. Each range accumulates privately.
    3. Join: wait for every range. The first failure cancels the remaining
       ranges and propagates; no partial result is returned.
    4. Concatenate records in range order and sum charge and duration.
       In ``sum`` mode the concatenated values are added up.

    The merge is a plain concatenation. Any ordering the caller needs must be
    part of the query or applied to the returned data.
"""

from __future__ import annotations

import asyncio
import numbers
from time import perf_counter
from typing import Any

from ..config import DEFAULT_MAX_CONCURRENT_RANGES
from ..core.enums import CombineMode
from ..core.exceptions import AggregationError
from ..models.query import QueryParameter
from ..models.resources import CollectionTarget, PartitionKeyRange
from ..models.results import AggregateResult, QueryResult
from ..utils.retry import RetryPolicy
from .paging import QueryDriver, QueryRequest
from .paging.telemetry import log_fanout_complete, log_fanout_started, log_range_error
from .partitions import PartitionRangeResolver
from .routing import partition_range_headers, session_headers


def combine_records(records: list[Any], mode: CombineMode) -> Any:
    """Fold concatenated per-range records according to ``mode``.

    Raises:
        AggregationError: If ``mode`` is SUM and a value is not a number
    """
    if mode is CombineMode.CONCAT_ARRAYS:
        return records

    total: Any = 0
    for value in records:
        if isinstance(value, bool) or not isinstance(value, numbers.Number):
            raise AggregationError(
                f"Cannot sum non-numeric value {value!r}; "
                "use a query such as SELECT VALUE SUM(...) for sum aggregation"
            )
        total += value
    return total


class CrossPartitionAggregator:
    """Runs one query against every partition range and combines the results."""

    def __init__(
        self,
        resolver: PartitionRangeResolver,
        driver: QueryDriver,
        *,
        max_concurrent_ranges: int = DEFAULT_MAX_CONCURRENT_RANGES,
    ) -> None:
        """Initialize aggregator.

        Args:
            resolver: Partition range resolver
            driver: Query driver used for each range
            max_concurrent_ranges: Upper bound on ranges queried at once
        """
        if max_concurrent_ranges < 1:
            raise ValueError("max_concurrent_ranges must be at least 1")
        self._resolver = resolver
        self._driver = driver
        self._max_concurrent_ranges = max_concurrent_ranges

    async def query(
        self,
        target: CollectionTarget,
        query: str,
        parameters: list[QueryParameter] | None = None,
        combine_mode: CombineMode = CombineMode.CONCAT_ARRAYS,
        *,
        session_token: str | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> AggregateResult:
        """Query every partition range and combine the results.

        Args:
            target: Collection to query
            query: Query text; use ``SELECT VALUE SUM(...)`` style queries
                together with ``CombineMode.SUM``
            parameters: Values substituted into the query
            combine_mode: Concatenate records or sum them
            session_token: Optional session token sent with every request
            retry_policy: Override for the per-request retry policy

        Returns:
            AggregateResult with combined data and summed charge and duration

        Raises:
            RequestError: If any range fails permanently
            TransientError: If any range exhausts its retries
            AggregationError: If summing meets a non-numeric value
        """
        combine_mode = CombineMode(combine_mode)
        start = perf_counter()

        ranges = await self._resolver.resolve(
            target, session_token=session_token, retry_policy=retry_policy
        )
        concurrency = max(1, min(len(ranges), self._max_concurrent_ranges))
        log_fanout_started(target=str(target), ranges=len(ranges), concurrency=concurrency)

        semaphore = asyncio.Semaphore(concurrency)
        base_request = QueryRequest(
            target=target,
            query=query,
            parameters=tuple(parameters or ()),
            routing_headers=session_headers(session_token),
        )
        results = await self._gather_ranges(
            [
                self._query_range(semaphore, base_request, pk_range, retry_policy)
                for pk_range in ranges
            ]
        )

        records: list[Any] = []
        request_charge = 0.0
        request_duration_ms = 0.0
        for result in results:
            records.extend(result.records)
            request_charge += result.request_charge
            request_duration_ms += result.request_duration_ms

        log_fanout_complete(
            target=str(target),
            ranges=len(ranges),
            request_charge=request_charge,
            request_duration_ms=request_duration_ms,
            total_latency_ms=(perf_counter() - start) * 1000.0,
        )
        return AggregateResult(
            data=combine_records(records, combine_mode),
            request_charge=request_charge,
            request_duration_ms=request_duration_ms,
            ranges_queried=len(ranges),
        )

    async def _query_range(
        self,
        semaphore: asyncio.Semaphore,
        base_request: QueryRequest,
        pk_range: PartitionKeyRange,
        retry_policy: RetryPolicy | None,
    ) -> QueryResult:
        request = QueryRequest(
            target=base_request.target,
            query=base_request.query,
            parameters=base_request.parameters,
            routing_headers={
                **base_request.routing_headers,
                **partition_range_headers(pk_range.composite_id),
            },
            label=pk_range.range_id,
        )
        async with semaphore:
            try:
                return await self._driver.run(request, retry_policy=retry_policy)
            except Exception as e:
                log_range_error(
                    target=str(base_request.target),
                    range_id=pk_range.range_id,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

    @staticmethod
    async def _gather_ranges(coros: list) -> list[QueryResult]:
        """Await every range; on the first failure cancel the rest and re-raise."""
        tasks = [asyncio.ensure_future(c) for c in coros]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
