"""Paging definitions.

This module defines the data structures passed between the query driver's
page fetches and its accumulator.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ...models.query import QueryParameter
from ...models.resources import CollectionTarget


@dataclass(frozen=True)
class QueryRequest:
    """Everything needed to fetch any page of one query.

    Attributes:
        target: Collection the query runs against
        query: Query text
        parameters: Values substituted into the query
        routing_headers: Partition key, range id, session token and similar
            headers sent with every page request (read-only)
        label: Short identifier used in log records (e.g. the range id)
    """

    target: CollectionTarget
    query: str
    parameters: tuple[QueryParameter, ...] = ()
    routing_headers: Mapping[str, str] = field(default_factory=dict)
    label: str = "gateway"

    def __post_init__(self) -> None:
        """Freeze a private copy of the routing headers."""
        object.__setattr__(self, "routing_headers", MappingProxyType(dict(self.routing_headers)))


@dataclass(frozen=True)
class QueryPage:
    """One page of query results.

    ``continuation`` is None exactly when this is the last page.
    """

    records: list[Any]
    continuation: str | None
    request_charge: float
    request_duration_ms: float
    page_index: int = 0

    @property
    def is_last(self) -> bool:
        return self.continuation is None


@dataclass
class PageAccumulator:
    """Running totals folded from successive pages."""

    records: list[Any] = field(default_factory=list)
    request_charge: float = 0.0
    request_duration_ms: float = 0.0
    pages_used: int = 0

    def add(self, page: QueryPage) -> None:
        self.records.extend(page.records)
        self.request_charge += page.request_charge
        self.request_duration_ms += page.request_duration_ms
        self.pages_used += 1
