"""HTTP client helper."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ...config import DEFAULT_TIMEOUT


@dataclass(frozen=True)
class HTTPResponse:
    """Fully-read response.

    Header names are stored lower-cased so lookups are case-insensitive.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name.lower(), default)

    def json(self) -> Any:
        if not self.body:
            return None
        return json.loads(self.body)


class HTTPClient:
    """Async HTTP client wrapper.

    Every response body is read or released before the connection goes back
    to the pool, including on paths where the caller has no use for it.
    """

    def __init__(self, base_url: str | None = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def build_url(self, path: str) -> str:
        if self.base_url and not path.startswith("http"):
            return f"{self.base_url}/{path.lstrip('/')}"
        return path

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        data: bytes | None = None,
    ) -> HTTPResponse:
        """Send one request and return its response snapshot.

        Args:
            method: HTTP method
            path: Path relative to ``base_url`` or an absolute URL
            headers: Request headers
            data: Already-encoded request body

        Returns:
            HTTPResponse with status, lower-cased headers and body bytes
        """
        url = self.build_url(path)
        async with self.session.request(method, url, headers=headers, data=data) as response:
            body = await response.read()
            return HTTPResponse(
                status=response.status,
                headers={k.lower(): v for k, v in response.headers.items()},
                body=body,
            )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
