"""Crypto naming service (.crypto)."""

from __future__ import annotations

import logging
from typing import ClassVar

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import decode_hex

from resolution.core.exceptions import ResolutionError
from resolution.core.hashing import CNS_HASH, HashScheme
from resolution.core.models import ResolutionResponse
from resolution.core.types import EthereumNetwork, NamingServiceName, ResolutionErrorCode
from resolution.naming.ethereum import EthereumNamingService, event_topic
from resolution.utils import DEFAULT_INFURA_PROJECT_ID, signed_infura_link

logger = logging.getLogger(__name__)

NEW_KEY_EVENT = "NewKey(uint256,string,string)"
RESET_RECORDS_EVENT = "ResetRecords(uint256)"

# Keys read in one round-trip by ``resolve``
STANDARD_KEYS: tuple[str, ...] = (
    "crypto.BTC.address",
    "crypto.ETH.address",
    "crypto.ZIL.address",
    "crypto.LTC.address",
    "crypto.XRP.address",
    "ipfs.html.value",
    "ipfs.redirect_domain.value",
    "whois.email.value",
    "gundb.username.value",
    "gundb.public_key.value",
    "browser.redirect_url",
)


class Cns(EthereumNamingService):
    """
    Crypto Name Service.

    Domains are ERC-721 tokens whose id is the namehash. The registry
    knows each token's owner and resolver; resolvers store string records
    keyed by ``crypto.ETH.address`` style names.
    """

    NAME: ClassVar[NamingServiceName] = NamingServiceName.CNS
    HASH_SCHEME: ClassVar[HashScheme] = CNS_HASH

    NETWORK_IDS: ClassVar[dict[int, str]] = {1: EthereumNetwork.MAINNET.value}
    REGISTRY_ADDRESSES: ClassVar[dict[str, str]] = {
        EthereumNetwork.MAINNET.value: "0xD1E5b0FF1287aA9f9A268759062E4Ab08b9Dacbe",
    }

    @classmethod
    def default_url(cls, network: str) -> str | None:
        return signed_infura_link(DEFAULT_INFURA_PROJECT_ID, network)

    @classmethod
    def supports_domain(cls, domain: str) -> bool:
        """Syntactic check shared with the API service."""
        if domain == "crypto":
            return True
        return domain.endswith(".crypto") and all(label for label in domain.split("."))

    def is_supported_domain(self, domain: str) -> bool:
        return self.supports_domain(domain)

    def _token_id(self, domain: str) -> int:
        return int(self.namehash(domain), 16)

    async def owner(self, domain: str) -> str | None:
        registry = self._ensure_supported_network()
        return await self._call_address(registry, "ownerOf(uint256)", [self._token_id(domain)])

    async def resolver(self, domain: str) -> str:
        registry = self._ensure_supported_network()
        resolver = await self._call_address(
            registry, "resolverOf(uint256)", [self._token_id(domain)]
        )
        if resolver is None:
            raise await self._ownership_error(domain)
        return resolver

    async def record(self, domain: str, key: str) -> str:
        resolver = await self.resolver(domain)
        value = await self._call_string(
            resolver, "get(string,uint256)", [key, self._token_id(domain)]
        )
        if not value:
            raise ResolutionError(
                ResolutionErrorCode.RECORD_NOT_FOUND, domain=domain, record_name=key
            )
        return value

    async def address(self, domain: str, currency_ticker: str) -> str:
        ticker = currency_ticker.upper()
        try:
            return await self.record(domain, f"crypto.{ticker}.address")
        except ResolutionError as e:
            if e.code != ResolutionErrorCode.RECORD_NOT_FOUND:
                raise
            raise ResolutionError(
                ResolutionErrorCode.UNSPECIFIED_CURRENCY,
                domain=domain,
                currency_ticker=ticker,
            ) from e

    async def _get_many(self, resolver: str, keys: list[str], token_id: int) -> dict[str, str]:
        result = await self._eth_call(
            resolver, "getMany(string[],uint256)", [keys, token_id], ["string[]"]
        )
        values = result[0] if result else ()
        return {key: value for key, value in zip(keys, values) if value}

    async def resolve(self, domain: str) -> ResolutionResponse | None:
        self._ensure_supported_domain(domain)
        owner = await self.owner(domain)
        if owner is None:
            return None

        try:
            resolver = await self.resolver(domain)
        except ResolutionError as e:
            if e.code != ResolutionErrorCode.UNSPECIFIED_RESOLVER:
                raise
            records: dict[str, str] = {}
        else:
            records = await self._get_many(resolver, list(STANDARD_KEYS), self._token_id(domain))

        return ResolutionResponse.from_records(
            records, owner=owner, service_type=self.NAME.value
        )

    async def get_all_keys(self, domain: str) -> list[str]:
        """
        Collect record keys from the resolver's ``NewKey`` events.

        Keys added before the most recent ``ResetRecords`` event are dropped.
        """
        resolver = await self.resolver(domain)
        token_topic = self.namehash(domain)

        resets = await self._get_logs(resolver, [event_topic(RESET_RECORDS_EVENT), token_topic])
        since_block = max((int(log["blockNumber"], 16) for log in resets), default=0)

        logs = await self._get_logs(resolver, [event_topic(NEW_KEY_EVENT), token_topic])
        keys: list[str] = []
        for log in logs:
            if int(log["blockNumber"], 16) < since_block:
                continue
            try:
                (key,) = decode(["string"], decode_hex(log["data"]))
            except DecodingError:
                logger.warning("Skipping undecodable NewKey log for %s", domain)
                continue
            if key not in keys:
                keys.append(key)
        return keys
