"""Zilliqa naming service (.zil)."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from resolution.core.exceptions import ProviderError, ResolutionError
from resolution.core.hashing import ZNS_HASH, HashScheme
from resolution.core.models import ResolutionResponse
from resolution.core.types import NamingServiceName, ResolutionErrorCode, ZilliqaNetwork
from resolution.naming.blockchain import BlockchainNamingService
from resolution.utils import is_null_address

logger = logging.getLogger(__name__)


class Zns(BlockchainNamingService):
    """
    Zilliqa Naming Service.

    The registry contract maps a namehash to ``[owner, resolver]``; each
    resolver contract keeps all records of a domain in one ``records`` map.
    State is read with ``GetSmartContractSubState``.
    """

    NAME: ClassVar[NamingServiceName] = NamingServiceName.ZNS
    HASH_SCHEME: ClassVar[HashScheme] = ZNS_HASH

    NETWORK_IDS: ClassVar[dict[int, str]] = {
        1: ZilliqaNetwork.MAINNET.value,
        333: ZilliqaNetwork.TESTNET.value,
    }
    REGISTRY_ADDRESSES: ClassVar[dict[str, str]] = {
        ZilliqaNetwork.MAINNET.value: "0x9611c53be6d1b32058b2747bdececed7e1216793",
    }
    DEFAULT_URLS: ClassVar[dict[str, str]] = {
        ZilliqaNetwork.MAINNET.value: "https://api.zilliqa.com",
        ZilliqaNetwork.TESTNET.value: "https://dev-api.zilliqa.com",
    }

    @classmethod
    def default_url(cls, network: str) -> str | None:
        return cls.DEFAULT_URLS.get(network)

    @classmethod
    def supports_domain(cls, domain: str) -> bool:
        """Syntactic check shared with the API service."""
        if domain == "zil":
            return True
        return (
            domain.endswith(".zil")
            and domain.find(".") > 0
            and all(label for label in domain.split("."))
        )

    def is_supported_domain(self, domain: str) -> bool:
        return self.supports_domain(domain)

    async def _get_substate(self, contract: str, field: str, keys: list[str]) -> dict[str, Any]:
        params = [contract.lower().removeprefix("0x"), field, keys]
        result = await self._request("GetSmartContractSubState", params)
        state = result.get(field) if isinstance(result, dict) else result
        if state is not None and not isinstance(state, dict):
            raise self._service_down(
                "GetSmartContractSubState",
                ProviderError(f"Unexpected {field} state: {result!r}"),
            )
        return state or {}

    async def _registry_record(self, domain: str) -> tuple[str | None, str | None]:
        """Return ``(owner, resolver)`` for a domain, None for unset values."""
        registry = self._ensure_supported_network()
        node = self.namehash(domain)
        records = await self._get_substate(registry, "records", [node])

        entry = records.get(node) or {}
        arguments = entry.get("arguments") or []
        owner, resolver = (arguments + [None, None])[:2]
        return (
            None if is_null_address(owner) else owner,
            None if is_null_address(resolver) else resolver,
        )

    async def _resolver_records(self, resolver: str) -> dict[str, str]:
        return await self._get_substate(resolver, "records", [])

    async def _records(self, domain: str) -> dict[str, str]:
        return await self._resolver_records(await self.resolver(domain))

    async def owner(self, domain: str) -> str | None:
        owner, _ = await self._registry_record(domain)
        return owner

    async def resolver(self, domain: str) -> str:
        owner, resolver = await self._registry_record(domain)
        if resolver is None:
            code = (
                ResolutionErrorCode.UNREGISTERED_DOMAIN
                if owner is None
                else ResolutionErrorCode.UNSPECIFIED_RESOLVER
            )
            raise ResolutionError(code, domain=domain)
        return resolver

    async def address(self, domain: str, currency_ticker: str) -> str:
        ticker = currency_ticker.upper()
        records = await self._records(domain)
        address = records.get(f"crypto.{ticker}.address")
        if not address:
            raise ResolutionError(
                ResolutionErrorCode.UNSPECIFIED_CURRENCY,
                domain=domain,
                currency_ticker=ticker,
            )
        return address

    async def record(self, domain: str, key: str) -> str:
        records = await self._records(domain)
        value = records.get(key)
        if not value:
            raise ResolutionError(
                ResolutionErrorCode.RECORD_NOT_FOUND, domain=domain, record_name=key
            )
        return value

    async def get_all_keys(self, domain: str) -> list[str]:
        records = await self._records(domain)
        return list(records)

    async def resolve(self, domain: str) -> ResolutionResponse | None:
        self._ensure_supported_domain(domain)
        owner, resolver = await self._registry_record(domain)
        if owner is None:
            return None

        records = await self._resolver_records(resolver) if resolver else {}
        try:
            ttl = int(records.get("ttl", 0))
        except ValueError:
            ttl = 0
        return ResolutionResponse.from_records(
            records, owner=owner, service_type=self.NAME.value, ttl=ttl
        )
