"""Query payload models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QueryParameter(BaseModel):
    """A parameter substituted into a query, e.g. ``@city`` -> ``"Bournemouth"``."""

    name: str = Field(..., min_length=1)
    value: Any = None

    model_config = ConfigDict(frozen=True)


def build_query_body(query: str, parameters: list[QueryParameter]) -> dict[str, Any]:
    """Build the JSON body of a query request."""
    return {
        "query": query,
        "parameters": [p.model_dump() for p in parameters],
    }
