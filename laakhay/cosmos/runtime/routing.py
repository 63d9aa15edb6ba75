"""Routing header helpers."""

from __future__ import annotations

import json

from ..config import (
    HEADER_ENABLE_CROSS_PARTITION,
    HEADER_PARTITION_KEY,
    HEADER_PARTITION_KEY_RANGE_ID,
    HEADER_SESSION_TOKEN,
)


def format_partition_key_value(value: str) -> str:
    """Encode a partition key value the way the service expects: ``["value"]``."""
    return json.dumps([value])


def partition_key_headers(partition: str) -> dict[str, str]:
    return {HEADER_PARTITION_KEY: format_partition_key_value(partition)}


def partition_range_headers(range_id: str) -> dict[str, str]:
    """Headers that pin a query to one physical partition range."""
    return {
        HEADER_PARTITION_KEY_RANGE_ID: range_id,
        HEADER_ENABLE_CROSS_PARTITION: "True",
    }


def session_headers(session_token: str | None) -> dict[str, str]:
    if not session_token:
        return {}
    return {HEADER_SESSION_TOKEN: session_token}
