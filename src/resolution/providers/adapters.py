"""Adapters from legacy client calling conventions to the Provider interface."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Awaitable, Callable
from typing import Any

from resolution.core.exceptions import ConfigurationError, ProviderError
from resolution.core.models import RequestArguments
from resolution.providers.base import Provider
from resolution.providers.http import unwrap_rpc_response

RequestFn = Callable[[RequestArguments, "str | None"], Awaitable[Any]]

_ids = itertools.count(1)


class AdaptedProvider:
    """Provider backed by a plain request coroutine function."""

    def __init__(self, request_fn: RequestFn, source: Any) -> None:
        self._request_fn = request_fn
        self.source = source

    async def request(
        self,
        args: RequestArguments,
        network: str | None = None,
    ) -> Any:
        return await self._request_fn(args, network)

    def __repr__(self) -> str:
        return f"AdaptedProvider(source={type(self.source).__name__})"


async def _send_with_callback(
    send: Callable[[dict[str, Any], Callable[[Any, Any], None]], Any],
    args: RequestArguments,
) -> Any:
    """Bridge a ``send(payload, callback(error, response))`` call to a coroutine."""
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def settle(error: Any, response: Any) -> None:
        if future.done():
            return
        if error:
            future.set_exception(
                ProviderError(f"Provider error for {args.method}: {error}", method=args.method)
            )
            return
        try:
            future.set_result(unwrap_rpc_response(response, args.method))
        except ProviderError as e:
            future.set_exception(e)

    def callback(error: Any, response: Any) -> None:
        # Callbacks may fire from a worker thread
        loop.call_soon_threadsafe(settle, error, response)

    send(args.to_payload(next(_ids)), callback)
    return await future


def from_web3_version0_provider(provider: Any) -> Provider:
    """Adapt a provider implementing ``send_async(payload, callback)``."""

    async def request(args: RequestArguments, network: str | None = None) -> Any:
        return await _send_with_callback(provider.send_async, args)

    return AdaptedProvider(request, provider)


def from_web3_version1_provider(provider: Any) -> Provider:
    """Adapt a provider implementing ``send(payload, callback)``."""

    async def request(args: RequestArguments, network: str | None = None) -> Any:
        return await _send_with_callback(provider.send, args)

    return AdaptedProvider(request, provider)


def from_ethers_provider(provider: Any) -> Provider:
    """
    Adapt a provider exposing an awaitable ``call(transaction, block_tag)``.

    Only ``eth_call`` is supported, which covers every read the naming
    services perform through a provider.
    """

    async def request(args: RequestArguments, network: str | None = None) -> Any:
        if args.method != "eth_call":
            raise ProviderError(
                f"Method {args.method} is not supported by ethers-style providers",
                method=args.method,
            )
        transaction, *rest = args.params
        block_tag = rest[0] if rest else "latest"
        try:
            return await provider.call(transaction, block_tag)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"Provider call failed: {e}", method=args.method) from e

    return AdaptedProvider(request, provider)


def adapt_provider(provider: Any) -> Provider:
    """
    Pick an adapter by the shape of the given object.

    Objects that already implement ``request`` are returned unchanged.

    Raises:
        ConfigurationError: If the object matches no known convention.
    """
    if isinstance(provider, Provider):
        return provider
    if callable(getattr(provider, "send_async", None)):
        return from_web3_version0_provider(provider)
    if callable(getattr(provider, "send", None)):
        return from_web3_version1_provider(provider)
    if callable(getattr(provider, "call", None)):
        return from_ethers_provider(provider)
    raise ConfigurationError(
        f"Unsupported provider: {type(provider).__name__}",
        details={"provider_type": type(provider).__name__},
    )
