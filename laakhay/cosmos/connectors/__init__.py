"""Service endpoint connectors."""

from .endpoints import get_endpoint_adapter, get_endpoint_spec, list_endpoint_ids

__all__ = ["get_endpoint_adapter", "get_endpoint_spec", "list_endpoint_ids"]
