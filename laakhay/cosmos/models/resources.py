"""Resource addressing and resource description models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CollectionTarget(BaseModel):
    """A collection addressed by database and collection name."""

    database: str = Field(..., min_length=1)
    collection: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def database_link(self) -> str:
        return f"dbs/{self.database}"

    @property
    def resource_link(self) -> str:
        return f"dbs/{self.database}/colls/{self.collection}"

    @property
    def docs_path(self) -> str:
        return f"{self.resource_link}/docs"

    @property
    def pkranges_path(self) -> str:
        return f"{self.resource_link}/pkranges"

    def document_link(self, document_id: str) -> str:
        return f"{self.docs_path}/{document_id}"

    def __str__(self) -> str:
        return f"{self.database}/{self.collection}"


class PartitionKeyRange(BaseModel):
    """One physical partition of a collection.

    ``composite_id`` (``<collection rid>,<range id>``) is the value sent in
    the partition-key-range routing header.
    """

    resource_id: str = Field(..., min_length=1)
    range_id: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def composite_id(self) -> str:
        return f"{self.resource_id},{self.range_id}"


class PartitionKeyDefinition(BaseModel):
    """Partition key definition of a collection."""

    paths: list[str]
    kind: str = "Hash"
    version: int | None = Field(default=None, alias="Version")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class CosmosCollection(BaseModel):
    """Information about a collection."""

    id: str
    partition_key: PartitionKeyDefinition = Field(..., alias="partitionKey")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
