"""Provider capability consumed by blockchain naming services."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from resolution.core.models import RequestArguments


@runtime_checkable
class Provider(Protocol):
    """
    Anything that can execute a JSON-RPC style request.

    Implementations return the raw ``result`` of the call and raise
    ProviderError on transport or node-level failures.
    """

    async def request(
        self,
        args: RequestArguments,
        network: str | None = None,
    ) -> Any:
        ...
