"""Core enumerations shared by the signer, runtime and connectors."""

from enum import Enum


class HttpVerb(str, Enum):
    """HTTP methods used against the document service."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ResourceType(str, Enum):
    """Resource type tags that take part in request signing.

    The value is the path segment the service uses for the resource, which
    is also the tag expected inside the signed payload.
    """

    DATABASE = "dbs"
    COLLECTION = "colls"
    DOCUMENT = "docs"
    PARTITION_KEY_RANGE = "pkranges"


class CombineMode(str, Enum):
    """How per-range results are folded by the cross-partition aggregator."""

    CONCAT_ARRAYS = "concatArrays"
    SUM = "sum"
