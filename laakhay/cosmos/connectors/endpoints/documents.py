"""Document endpoint definitions and adapters.

Every document call is routed with the partition key header. Create,
replace and delete report the session token returned by the service so it
can be passed to later reads.
"""

from __future__ import annotations

from typing import Any

from laakhay.cosmos.config import HEADER_IF_MATCH, HEADER_IS_UPSERT, PARTITION_KEY_FIELD
from laakhay.cosmos.core.enums import HttpVerb, ResourceType
from laakhay.cosmos.models import (
    CreateDocumentOptions,
    CreateDocumentResult,
    DeleteDocumentResult,
    GetDocumentResult,
    ReplaceDocumentOptions,
    ReplaceDocumentResult,
    RequestOptions,
)
from laakhay.cosmos.runtime.rest import (
    HTTPResponse,
    ResponseAdapter,
    RestEndpointSpec,
    request_charge,
    request_duration_ms,
    session_token,
)
from laakhay.cosmos.runtime.routing import partition_key_headers, session_headers


def _document_path(params: dict[str, Any]) -> str:
    return params["target"].document_link(params["document_id"])


def _docs_path(params: dict[str, Any]) -> str:
    return params["target"].docs_path


def _collection_link(params: dict[str, Any]) -> str:
    return params["target"].resource_link


def _document_body(params: dict[str, Any]) -> dict[str, Any]:
    """Copy of the document with its partition key field set."""
    return {**params["document"], PARTITION_KEY_FIELD: params["partition"]}


def _routing_headers(params: dict[str, Any]) -> dict[str, str]:
    options: RequestOptions = params.get("options") or RequestOptions()
    return {**partition_key_headers(params["partition"]), **session_headers(options.session_token)}


def _create_headers(params: dict[str, Any]) -> dict[str, str]:
    headers = _routing_headers(params)
    options = params.get("options") or CreateDocumentOptions()
    if getattr(options, "upsert", False):
        headers[HEADER_IS_UPSERT] = "True"
    return headers


def _replace_headers(params: dict[str, Any]) -> dict[str, str]:
    headers = _routing_headers(params)
    options = params.get("options") or ReplaceDocumentOptions()
    if getattr(options, "if_match", None):
        headers[HEADER_IF_MATCH] = options.if_match
    return headers


def _metrics(response: HTTPResponse) -> dict[str, float]:
    return {
        "request_charge": request_charge(response),
        "request_duration_ms": request_duration_ms(response),
    }


CREATE_SPEC = RestEndpointSpec(
    id="create_document",
    verb=HttpVerb.POST,
    resource_type=ResourceType.DOCUMENT,
    build_path=_docs_path,
    build_resource_link=_collection_link,
    build_body=_document_body,
    build_headers=_create_headers,
    describe=lambda p: f"create document {p['target']}/{p['document'].get('id')}",
)


class CreateAdapter(ResponseAdapter):
    """201 is a new document; 200 is an upsert that replaced one."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> CreateDocumentResult:
        return CreateDocumentResult(
            did_create=response.status == 201,
            session_token=session_token(response),
            **_metrics(response),
        )


GET_SPEC = RestEndpointSpec(
    id="get_document",
    verb=HttpVerb.GET,
    resource_type=ResourceType.DOCUMENT,
    build_path=_document_path,
    build_headers=_routing_headers,
    accepted_statuses=frozenset({404}),
    describe=lambda p: f"get document {p['target']}/{p['document_id']}",
)


class GetAdapter(ResponseAdapter):
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> GetDocumentResult:
        doc = response.json() if response.ok else None
        return GetDocumentResult(doc=doc, **_metrics(response))


REPLACE_SPEC = RestEndpointSpec(
    id="replace_document",
    verb=HttpVerb.PUT,
    resource_type=ResourceType.DOCUMENT,
    build_path=_document_path,
    build_body=_document_body,
    build_headers=_replace_headers,
    accepted_statuses=frozenset({412}),
    describe=lambda p: f"replace document {p['target']}/{p['document_id']}",
)


class ReplaceAdapter(ResponseAdapter):
    """412 means the If-Match precondition failed and nothing was replaced."""

    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> ReplaceDocumentResult:
        return ReplaceDocumentResult(
            did_replace=response.ok,
            session_token=session_token(response),
            **_metrics(response),
        )


DELETE_SPEC = RestEndpointSpec(
    id="delete_document",
    verb=HttpVerb.DELETE,
    resource_type=ResourceType.DOCUMENT,
    build_path=_document_path,
    build_headers=_routing_headers,
    accepted_statuses=frozenset({404}),
    describe=lambda p: f"delete document {p['target']}/{p['document_id']}",
)


class DeleteAdapter(ResponseAdapter):
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> DeleteDocumentResult:
        return DeleteDocumentResult(
            did_delete=response.ok,
            session_token=session_token(response),
            **_metrics(response),
        )
