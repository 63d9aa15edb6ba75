"""Database endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from laakhay.cosmos.core.enums import HttpVerb, ResourceType
from laakhay.cosmos.models import DeleteResult
from laakhay.cosmos.models.schemas import DatabaseList
from laakhay.cosmos.runtime.rest import HTTPResponse, ResponseAdapter, RestEndpointSpec


def _database_path(params: dict[str, Any]) -> str:
    return f"dbs/{params['database']}"


LIST_SPEC = RestEndpointSpec(
    id="list_databases",
    verb=HttpVerb.GET,
    resource_type=ResourceType.DATABASE,
    build_path=lambda p: "dbs",
    build_resource_link=lambda p: "",
    describe=lambda p: "list databases",
)


class ListAdapter(ResponseAdapter):
    """Project the database list to ids."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> list[str]:
        return [db.id for db in DatabaseList.model_validate(response.json()).databases]


CREATE_SPEC = RestEndpointSpec(
    id="create_database",
    verb=HttpVerb.POST,
    resource_type=ResourceType.DATABASE,
    build_path=lambda p: "dbs",
    build_resource_link=lambda p: "",
    build_body=lambda p: {"id": p["database"]},
    describe=lambda p: f"create database {p['database']}",
)


class CreateAdapter(ResponseAdapter):
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> None:
        return None


DELETE_SPEC = RestEndpointSpec(
    id="delete_database",
    verb=HttpVerb.DELETE,
    resource_type=ResourceType.DATABASE,
    build_path=_database_path,
    accepted_statuses=frozenset({404}),
    describe=lambda p: f"delete database {p['database']}",
)


class DeleteAdapter(ResponseAdapter):
    """404 means there was nothing to delete."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> DeleteResult:
        return DeleteResult(did_delete=response.ok)
