"""REST endpoint registry.

This module exports all endpoint specifications and adapters for the
single-exchange database, collection and document operations.
"""

from __future__ import annotations

from laakhay.cosmos.runtime.rest import ResponseAdapter, RestEndpointSpec

from . import collections, databases, documents

# Registry mapping endpoint IDs to specs and adapters
_ENDPOINT_REGISTRY: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    "list_databases": (databases.LIST_SPEC, databases.ListAdapter),
    "create_database": (databases.CREATE_SPEC, databases.CreateAdapter),
    "delete_database": (databases.DELETE_SPEC, databases.DeleteAdapter),
    "list_collections": (collections.LIST_SPEC, collections.ListAdapter),
    "create_collection": (collections.CREATE_SPEC, collections.CreateAdapter),
    "get_collection": (collections.GET_SPEC, collections.GetAdapter),
    "delete_collection": (collections.DELETE_SPEC, collections.DeleteAdapter),
    "create_document": (documents.CREATE_SPEC, documents.CreateAdapter),
    "get_document": (documents.GET_SPEC, documents.GetAdapter),
    "replace_document": (documents.REPLACE_SPEC, documents.ReplaceAdapter),
    "delete_document": (documents.DELETE_SPEC, documents.DeleteAdapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get endpoint specification by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "get_document")

    Returns:
        RestEndpointSpec if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    """Get endpoint adapter class by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "get_document")

    Returns:
        Adapter class if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoint_ids() -> list[str]:
    return sorted(_ENDPOINT_REGISTRY)


__all__ = ["get_endpoint_adapter", "get_endpoint_spec", "list_endpoint_ids"]
