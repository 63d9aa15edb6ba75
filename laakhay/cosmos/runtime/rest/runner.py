"""REST request runner using endpoint specs and response adapters.

Each run is a single logical exchange: the runner hands one attempt to the
retry executor, and every attempt goes through the transport, so headers
are signed once per attempt.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ...config import CONTENT_TYPE_JSON
from ...core.enums import HttpVerb, ResourceType
from ...core.exceptions import RequestError
from ...utils.retry import DEFAULT_RETRY_POLICY, RetryPolicy, retry_async
from .http_client import HTTPResponse
from .transport import CosmosTransport


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    verb: HttpVerb
    resource_type: ResourceType
    build_path: Callable[[dict[str, Any]], str]
    # Signed resource link; defaults to the request path
    build_resource_link: Callable[[dict[str, Any]], str] | None = None
    build_body: Callable[[dict[str, Any]], Any] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # Non-2xx statuses handed to the adapter instead of raising, e.g. 404
    accepted_statuses: frozenset[int] = field(default_factory=frozenset)
    content_type: str = CONTENT_TYPE_JSON
    describe: Callable[[dict[str, Any]], str] | None = None


class ResponseAdapter:
    def parse(self, response: HTTPResponse, params: dict[str, Any]) -> Any:
        return response.json()


class RestRunner:
    def __init__(
        self, transport: CosmosTransport, retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    ) -> None:
        self._t = transport
        self._retry_policy = retry_policy

    async def run(
        self,
        *,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        params: dict[str, Any],
        retry_policy: RetryPolicy | None = None,
    ) -> Any:
        path = spec.build_path(params)
        resource_link = spec.build_resource_link(params) if spec.build_resource_link else path
        body = spec.build_body(params) if spec.build_body else None
        headers = spec.build_headers(params) if spec.build_headers else None

        async def attempt() -> Any:
            response = await self._t.send(
                verb=spec.verb,
                resource_type=spec.resource_type,
                resource_link=resource_link,
                path=path,
                headers=headers,
                json_body=body,
                content_type=spec.content_type,
            )
            if not response.ok and response.status not in spec.accepted_statuses:
                description = spec.describe(params) if spec.describe else spec.id
                raise RequestError(
                    f"Unable to {description}",
                    method=spec.verb.value,
                    path=path,
                    status_code=response.status,
                    body=response.text,
                )
            return adapter.parse(response, params)

        return await retry_async(
            attempt, retry_policy or self._retry_policy, description=spec.id
        )
