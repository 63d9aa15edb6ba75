"""Structured logging for paged queries and cross-partition fan-out.

Records carry counts, charges and latencies only. Query parameters,
document contents and credentials are never logged.
"""

from __future__ import annotations

import logging

from .definitions import PageAccumulator, QueryPage

logger = logging.getLogger(__name__)


def log_page_completed(
    *,
    target: str,
    label: str,
    page: QueryPage,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page.

    Args:
        target: Collection identifier
        label: Query label (gateway or range id)
        page: The page that was fetched
        latency_ms: Client-side latency including retries (optional)
    """
    logger.info(
        "page_completed",
        extra={
            "target": target,
            "label": label,
            "page_index": page.page_index,
            "records": len(page.records),
            "request_charge": page.request_charge,
            "has_more": not page.is_last,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    target: str,
    label: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a page fetch that failed permanently or ran out of retries."""
    logger.error(
        "page_error",
        extra={
            "target": target,
            "label": label,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_query_complete(
    *,
    target: str,
    label: str,
    totals: PageAccumulator,
    total_latency_ms: float | None = None,
) -> None:
    logger.info(
        "query_complete",
        extra={
            "target": target,
            "label": label,
            "pages_used": totals.pages_used,
            "total_records": len(totals.records),
            "request_charge": totals.request_charge,
            "request_duration_ms": totals.request_duration_ms,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_fanout_started(*, target: str, ranges: int, concurrency: int) -> None:
    logger.info(
        "fanout_started",
        extra={"target": target, "ranges": ranges, "concurrency": concurrency},
    )


def log_fanout_complete(
    *,
    target: str,
    ranges: int,
    request_charge: float,
    request_duration_ms: float,
    total_latency_ms: float | None = None,
) -> None:
    logger.info(
        "fanout_complete",
        extra={
            "target": target,
            "ranges": ranges,
            "request_charge": request_charge,
            "request_duration_ms": request_duration_ms,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_range_error(*, target: str, range_id: str, error_type: str, error_message: str) -> None:
    logger.error(
        "range_error",
        extra={
            "target": target,
            "range_id": range_id,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
