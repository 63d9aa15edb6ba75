"""Collection endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from laakhay.cosmos.config import PARTITION_KEY_PATH
from laakhay.cosmos.core.enums import HttpVerb, ResourceType
from laakhay.cosmos.models import CosmosCollection, DeleteResult
from laakhay.cosmos.models.schemas import CollectionList
from laakhay.cosmos.runtime.rest import HTTPResponse, ResponseAdapter, RestEndpointSpec


def _database_link(params: dict[str, Any]) -> str:
    return f"dbs/{params['database']}"


def _colls_path(params: dict[str, Any]) -> str:
    return f"dbs/{params['database']}/colls"


def _collection_path(params: dict[str, Any]) -> str:
    return params["target"].resource_link


def build_create_body(params: dict[str, Any]) -> dict[str, Any]:
    """New collections are hash-partitioned on ``/partitionKey``."""
    return {
        "id": params["collection"],
        "partitionKey": {
            "paths": [PARTITION_KEY_PATH],
            "kind": "Hash",
            "Version": 2,
        },
    }


LIST_SPEC = RestEndpointSpec(
    id="list_collections",
    verb=HttpVerb.GET,
    resource_type=ResourceType.COLLECTION,
    build_path=_colls_path,
    build_resource_link=_database_link,
    describe=lambda p: f"list collections of database {p['database']}",
)


class ListAdapter(ResponseAdapter):
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> list[str]:
        return [c.id for c in CollectionList.model_validate(response.json()).collections]


CREATE_SPEC = RestEndpointSpec(
    id="create_collection",
    verb=HttpVerb.POST,
    resource_type=ResourceType.COLLECTION,
    build_path=_colls_path,
    build_resource_link=_database_link,
    build_body=build_create_body,
    describe=lambda p: f"create collection {p['database']}/{p['collection']}",
)


class CreateAdapter(ResponseAdapter):
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> None:
        return None


GET_SPEC = RestEndpointSpec(
    id="get_collection",
    verb=HttpVerb.GET,
    resource_type=ResourceType.COLLECTION,
    build_path=_collection_path,
    describe=lambda p: f"get collection {p['target']}",
)


class GetAdapter(ResponseAdapter):
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> CosmosCollection:
        return CosmosCollection.model_validate(response.json())


DELETE_SPEC = RestEndpointSpec(
    id="delete_collection",
    verb=HttpVerb.DELETE,
    resource_type=ResourceType.COLLECTION,
    build_path=_collection_path,
    accepted_statuses=frozenset({404}),
    describe=lambda p: f"delete collection {p['target']}",
)


class DeleteAdapter(ResponseAdapter):
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> DeleteResult:
        return DeleteResult(did_delete=response.ok)
