"""Request authentication."""

from .credential import CosmosCredential
from .signing import SignedHeaders, build_payload, format_http_date, sign_request

__all__ = [
    "CosmosCredential",
    "SignedHeaders",
    "build_payload",
    "format_http_date",
    "sign_request",
]
