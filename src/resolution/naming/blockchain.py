"""Shared plumbing for naming services that read a blockchain."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from resolution.core.exceptions import ConfigurationError, ProviderError, ResolutionError
from resolution.core.models import RequestArguments
from resolution.core.normalization import SourceDefinition
from resolution.core.types import ResolutionErrorCode
from resolution.naming.base import NamingService
from resolution.providers.adapters import adapt_provider
from resolution.providers.base import Provider
from resolution.providers.http import HttpProvider

logger = logging.getLogger(__name__)


class BlockchainNamingService(NamingService):
    """
    Naming service backed by contract state on a chain.

    Resolves its SourceDefinition into a network name, a registry address
    and a Provider. A url without a provider gets an HttpProvider which
    this service owns and closes.
    """

    DEFAULT_NETWORK: ClassVar[str] = "mainnet"
    NETWORK_IDS: ClassVar[dict[int, str]] = {}
    REGISTRY_ADDRESSES: ClassVar[dict[str, str]] = {}

    def __init__(
        self,
        source: SourceDefinition | None = None,
        *,
        timeout: float = 30.0,
    ) -> None:
        source = source or SourceDefinition()
        self.network = self._resolve_network(source.network)
        self.registry_address = self.REGISTRY_ADDRESSES.get(self.network)
        self._owns_provider = False

        if source.provider is not None:
            self.url = source.url
            self.provider: Provider = adapt_provider(source.provider)
        else:
            self.url = source.url or self.default_url(self.network)
            if not self.url:
                raise ConfigurationError(
                    f"No url configured for {self.NAME.value} network {self.network}",
                    details={"network": self.network},
                )
            self.provider = HttpProvider(self.url, timeout=timeout)
            self._owns_provider = True

        logger.debug(
            "%s configured for network %s (registry %s)",
            self.NAME.value,
            self.network,
            self.registry_address,
        )

    @classmethod
    def _resolve_network(cls, network: str | int | None) -> str:
        """Map a network id or name to the canonical network name."""
        if network is None or network == "":
            return cls.DEFAULT_NETWORK
        if isinstance(network, int) or str(network).isdigit():
            return cls.NETWORK_IDS.get(int(network), str(network))
        return str(network).lower()

    @classmethod
    def default_url(cls, network: str) -> str | None:
        """Public endpoint for a network, if one is known."""
        return None

    def is_supported_network(self) -> bool:
        return self.registry_address is not None

    def _ensure_supported_network(self) -> str:
        if self.registry_address is None:
            raise ResolutionError(
                ResolutionErrorCode.NAMING_SERVICE_DOWN,
                method=self.NAME.value,
                network=self.network,
            )
        return self.registry_address

    async def _request(self, method: str, params: list[Any]) -> Any:
        """Send one request through the provider, mapping transport failures."""
        try:
            return await self.provider.request(RequestArguments(method, params), self.network)
        except ProviderError as e:
            raise self._service_down(method, e) from e

    def _service_down(self, method: str, error: ProviderError) -> ResolutionError:
        logger.warning("%s provider failed on %s: %s", self.NAME.value, method, error)
        return ResolutionError(
            ResolutionErrorCode.NAMING_SERVICE_DOWN,
            method=self.NAME.value,
            reason=str(error),
        )

    async def close(self) -> None:
        if self._owns_provider and isinstance(self.provider, HttpProvider):
            await self.provider.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(network={self.network!r}, url={self.url!r})"
