"""Core components."""

from .enums import CombineMode, HttpVerb, ResourceType
from .exceptions import (
    AggregationError,
    AuthorizationExpiredError,
    CosmosError,
    CredentialError,
    RequestError,
    ServiceBusyError,
    TransientError,
)

__all__ = [
    "CombineMode",
    "HttpVerb",
    "ResourceType",
    "CosmosError",
    "CredentialError",
    "TransientError",
    "ServiceBusyError",
    "AuthorizationExpiredError",
    "RequestError",
    "AggregationError",
]
