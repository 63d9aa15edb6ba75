"""Result models returned by client operations."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RequestMetrics(BaseModel):
    """Cost accounting reported by the service."""

    request_charge: float = Field(default=0.0, ge=0)
    request_duration_ms: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(frozen=True)


class QueryResult(RequestMetrics):
    """Records of a paginated query with charge and duration summed over pages."""

    records: list[Any] = Field(default_factory=list)


class AggregateResult(RequestMetrics):
    """Combined result of a query run against every partition range.

    ``data`` is the concatenated record list, or a number when the results
    were summed.
    """

    data: Any = None
    ranges_queried: int = 0


class GetDocumentResult(RequestMetrics):
    doc: dict[str, Any] | None = None


class CreateDocumentResult(RequestMetrics):
    """``did_create`` is False when an upsert replaced an existing document."""

    did_create: bool
    session_token: str | None = None


class ReplaceDocumentResult(RequestMetrics):
    """``did_replace`` is False when the If-Match precondition failed."""

    did_replace: bool
    session_token: str | None = None


class DeleteDocumentResult(RequestMetrics):
    """``did_delete`` is False when the document did not exist."""

    did_delete: bool
    session_token: str | None = None


class DeleteResult(BaseModel):
    """Outcome of deleting a database or collection."""

    did_delete: bool

    model_config = ConfigDict(frozen=True)
