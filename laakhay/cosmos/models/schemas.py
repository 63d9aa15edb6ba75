"""Raw service response schemas.

These models mirror the JSON bodies returned by the service before they
are projected into the library's result models. Unknown fields are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ResourceId(_RawModel):
    id: str


class DatabaseList(_RawModel):
    databases: list[ResourceId] = Field(default_factory=list, alias="Databases")


class CollectionList(_RawModel):
    collections: list[ResourceId] = Field(default_factory=list, alias="DocumentCollections")


class PartitionKeyRangeList(_RawModel):
    rid: str = Field(..., alias="_rid")
    ranges: list[ResourceId] = Field(default_factory=list, alias="PartitionKeyRanges")


class QueryPageBody(_RawModel):
    documents: list[Any] = Field(default_factory=list, alias="Documents")
