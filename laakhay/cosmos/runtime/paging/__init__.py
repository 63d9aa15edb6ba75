"""Continuation-token pagination.

Architecture:
    - definitions.py: QueryRequest, QueryPage and the page accumulator
    - executors.py: QueryDriver (lazy page iterator plus folding run)
    - telemetry.py: Structured logging for pages and fan-out

Each page fetch is wrapped individually in the retry executor and signed
afresh, so a transient failure part-way through a query only repeats the
page it hit.
"""

from __future__ import annotations

from .definitions import PageAccumulator, QueryPage, QueryRequest
from .executors import QueryDriver, run_query

__all__ = [
    "PageAccumulator",
    "QueryDriver",
    "QueryPage",
    "QueryRequest",
    "run_query",
]
