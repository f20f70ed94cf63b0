"""JSON-RPC over HTTP provider."""

from __future__ import annotations

import itertools
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx

from resolution.core.exceptions import ProviderError
from resolution.core.models import RequestArguments

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "domain-resolution/0.1"


class HttpProvider:
    """
    Provider that posts JSON-RPC 2.0 requests to a node URL.

    The underlying httpx client is created lazily and reused across calls;
    call ``close()`` (or use ``async with``) to release it.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._headers = {
            "User-Agent": DEFAULT_USER_AGENT,
            "Content-Type": "application/json",
            **(headers or {}),
        }
        self._client: httpx.AsyncClient | None = None
        self._ids = itertools.count(1)

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self._headers,
                follow_redirects=True,
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise ProviderError(f"HTTP error: {e}", details={"url": self.url}) from e

    async def request(
        self,
        args: RequestArguments,
        network: str | None = None,
    ) -> Any:
        """Execute one JSON-RPC call and return its ``result``."""
        payload = args.to_payload(next(self._ids))
        logger.debug("JSON-RPC %s -> %s", args.method, self.url)

        async with self._get_client() as client:
            response = await client.post(self.url, json=payload)
            response.raise_for_status()
            try:
                body = response.json()
            except ValueError as e:
                raise ProviderError(
                    f"Invalid JSON from {self.url}", method=args.method
                ) from e

        return unwrap_rpc_response(body, args.method)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpProvider:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"HttpProvider(url={self.url!r})"


def unwrap_rpc_response(body: Any, method: str) -> Any:
    """Return the ``result`` of a JSON-RPC response or raise its error."""
    if not isinstance(body, dict):
        raise ProviderError(f"Malformed JSON-RPC response for {method}", method=method)
    if error := body.get("error"):
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise ProviderError(
            f"JSON-RPC error for {method}: {message}",
            method=method,
            details={"error": error},
        )
    return body.get("result")
