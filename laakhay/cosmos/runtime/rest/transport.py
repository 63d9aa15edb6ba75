"""Signed single-attempt transport.

One call to ``send`` is one attempt: it signs, sends, and turns transient
responses into TransientError subclasses. It never retries; callers wrap it
in ``retry_async`` so every attempt is signed afresh.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ...auth import CosmosCredential, sign_request
from ...config import (
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT,
    HEADER_CONTENT_TYPE,
    HEADER_CONTINUATION,
    HEADER_REQUEST_CHARGE,
    HEADER_REQUEST_DURATION,
    HEADER_SESSION_TOKEN,
)
from ...core.enums import HttpVerb, ResourceType
from ...utils.classifier import raise_for_transient_response
from .http_client import HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)


class CosmosTransport:
    """Thin wrapper around HTTPClient that signs each request."""

    def __init__(
        self,
        base_url: str,
        credential: CosmosCredential,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http: HTTPClient | None = None,
    ) -> None:
        self._credential = credential
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str | None:
        return self._http.base_url

    async def send(
        self,
        *,
        verb: HttpVerb,
        resource_type: ResourceType,
        resource_link: str,
        path: str,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        content_type: str = CONTENT_TYPE_JSON,
    ) -> HTTPResponse:
        """Sign and send a single request.

        Raises:
            ServiceBusyError: On 429, 503 or 504
            AuthorizationExpiredError: When the service rejects stale headers
        """
        signed = sign_request(self._credential, verb, resource_type, resource_link)
        request_headers = {
            **signed.as_dict(),
            HEADER_CONTENT_TYPE: content_type,
            **(headers or {}),
        }
        data = json.dumps(json_body).encode("utf-8") if json_body is not None else None

        response = await self._http.request(
            verb.value, path, headers=request_headers, data=data
        )
        raise_for_transient_response(response.status, response.text)
        return response

    async def close(self) -> None:
        await self._http.close()


def _float_header(response: HTTPResponse, name: str) -> float:
    raw = response.header(name)
    if not raw:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        logger.warning(
            "malformed_accounting_header",
            extra={"header": name, "value": raw},
        )
        return 0.0


def request_charge(response: HTTPResponse) -> float:
    return _float_header(response, HEADER_REQUEST_CHARGE)


def request_duration_ms(response: HTTPResponse) -> float:
    return _float_header(response, HEADER_REQUEST_DURATION)


def session_token(response: HTTPResponse) -> str | None:
    return response.header(HEADER_SESSION_TOKEN) or None


def continuation_token(response: HTTPResponse) -> str | None:
    return response.header(HEADER_CONTINUATION) or None
