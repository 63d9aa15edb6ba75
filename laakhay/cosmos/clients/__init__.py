"""Client facades."""

from .cosmos_client import CosmosClient

__all__ = ["CosmosClient"]
