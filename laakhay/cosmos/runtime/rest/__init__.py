"""REST runtime abstractions."""

from .http_client import HTTPClient, HTTPResponse
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import (
    CosmosTransport,
    continuation_token,
    request_charge,
    request_duration_ms,
    session_token,
)

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "CosmosTransport",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "continuation_token",
    "request_charge",
    "request_duration_ms",
    "session_token",
]
