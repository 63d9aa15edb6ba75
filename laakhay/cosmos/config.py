"""Shared Cosmos constants.

This module centralizes the API version, header names and runtime defaults
used by the signer, the REST runtime and the connectors.
"""

from __future__ import annotations

# REST API version sent with every request
API_VERSION = "2018-12-31"

# Request headers produced by the signer
HEADER_AUTHORIZATION = "Authorization"
HEADER_DATE = "x-ms-date"
HEADER_VERSION = "x-ms-version"

# Routing and behaviour headers
HEADER_CONTENT_TYPE = "content-type"
HEADER_PARTITION_KEY = "x-ms-documentdb-partitionkey"
HEADER_PARTITION_KEY_RANGE_ID = "x-ms-documentdb-partitionkeyrangeid"
HEADER_ENABLE_CROSS_PARTITION = "x-ms-documentdb-query-enablecrosspartition"
HEADER_IS_UPSERT = "x-ms-documentdb-is-upsert"
HEADER_IF_MATCH = "If-Match"

# Headers present on both requests and responses
HEADER_CONTINUATION = "x-ms-continuation"
HEADER_SESSION_TOKEN = "x-ms-session-token"

# Response accounting headers
HEADER_REQUEST_CHARGE = "x-ms-request-charge"
HEADER_REQUEST_DURATION = "x-ms-request-duration-ms"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_QUERY = "application/query+json"

# Delay before each of up to nine retries, 12.5 seconds in total
DEFAULT_RETRY_DELAYS_MS: tuple[int, ...] = (100, 200, 300, 400, 500, 1000, 2000, 3000, 5000)

# Total timeout per HTTP exchange (seconds)
DEFAULT_TIMEOUT = 30.0

# Upper bound on partition ranges queried at the same time
DEFAULT_MAX_CONCURRENT_RANGES = 10

# Collections created by this library are partitioned on this path
PARTITION_KEY_PATH = "/partitionKey"
PARTITION_KEY_FIELD = "partitionKey"
