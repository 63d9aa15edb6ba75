"""Shared fixtures for unit tests."""

from __future__ import annotations

import base64
import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from laakhay.cosmos.auth import CosmosCredential
from laakhay.cosmos.runtime.rest import CosmosTransport, HTTPResponse
from laakhay.cosmos.utils import RetryPolicy

TEST_MASTER_KEY = base64.b64encode(b"unit-test-signing-key-0123456789").decode("ascii")


def build_response(
    status: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
    *,
    charge: float | None = None,
    duration: float | None = None,
    continuation: str | None = None,
    session: str | None = None,
) -> HTTPResponse:
    all_headers = {k.lower(): v for k, v in (headers or {}).items()}
    if charge is not None:
        all_headers["x-ms-request-charge"] = str(charge)
    if duration is not None:
        all_headers["x-ms-request-duration-ms"] = str(duration)
    if continuation is not None:
        all_headers["x-ms-continuation"] = continuation
    if session is not None:
        all_headers["x-ms-session-token"] = session
    if body is None:
        raw = b""
    elif isinstance(body, (bytes, str)):
        raw = body.encode("utf-8") if isinstance(body, str) else body
    else:
        raw = json.dumps(body).encode("utf-8")
    return HTTPResponse(status=status, headers=all_headers, body=raw)


@pytest.fixture
def make_response() -> Callable[..., HTTPResponse]:
    """Factory for HTTPResponse snapshots."""
    return build_response


@pytest.fixture
def credential() -> CosmosCredential:
    return CosmosCredential.from_master_key(TEST_MASTER_KEY)


@pytest.fixture
def master_key() -> str:
    return TEST_MASTER_KEY


@pytest.fixture
def fast_policy() -> RetryPolicy:
    """Same shape as the default policy, without the waiting."""
    return RetryPolicy(delays_ms=(0, 0, 0, 0, 0, 0, 0, 0, 0))


@pytest.fixture
def mock_transport() -> MagicMock:
    """CosmosTransport whose ``send`` is an AsyncMock."""
    transport = MagicMock(spec=CosmosTransport)
    transport.send = AsyncMock()
    transport.close = AsyncMock()
    return transport
