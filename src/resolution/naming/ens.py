"""ENS naming service (.eth and friends)."""

from __future__ import annotations

import logging
import re
from typing import ClassVar

import base58
from eth_utils import decode_hex, to_checksum_address

from resolution.core.exceptions import ResolutionError
from resolution.core.hashing import ENS_HASH, HashScheme
from resolution.core.models import DomainMeta, ResolutionResponse
from resolution.core.types import EthereumNetwork, NamingServiceName, ResolutionErrorCode
from resolution.naming.ethereum import EthereumNamingService
from resolution.utils import DEFAULT_INFURA_PROJECT_ID, signed_infura_link

logger = logging.getLogger(__name__)

ENS_REGISTRY = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

# SLIP-44 coin types of EVM chains whose addresses are plain 20-byte values
EVM_COIN_TYPES: dict[str, int] = {
    "ETH": 60,
    "ETC": 61,
    "RSK": 137,
    "XDAI": 700,
}

IPFS_NAMESPACE = 0xE3
CID_V1 = 0x01
DAG_PB = 0x70
SHA2_256 = 0x12


def _read_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode an unsigned LEB128 varint, returning (value, next_offset)."""
    value = 0
    shift = 0
    while offset < len(data):
        byte = data[offset]
        offset += 1
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return value, offset
        shift += 7
    raise ValueError("Truncated varint")


def decode_ipfs_contenthash(contenthash: bytes) -> str | None:
    """
    Decode an EIP-1577 ``ipfs-ns`` contenthash to a base58 CIDv0.

    Returns None for other namespaces or CID shapes.
    """
    try:
        namespace, offset = _read_varint(contenthash)
        if namespace != IPFS_NAMESPACE:
            return None
        version, offset = _read_varint(contenthash, offset)
        if version == CID_V1:
            codec, offset = _read_varint(contenthash, offset)
            if codec != DAG_PB:
                return None
            multihash = contenthash[offset:]
        else:
            # CIDv0 stored as a bare multihash
            multihash = contenthash[offset - 1 :]
    except ValueError:
        return None

    if len(multihash) != 34 or multihash[0] != SHA2_256:
        return None
    return base58.b58encode(multihash).decode("ascii")


class Ens(EthereumNamingService):
    """
    Ethereum Name Service.

    Records live in per-domain resolver contracts found through the ENS
    registry. Text records use flat keys (``email``, ``url``...).
    """

    NAME: ClassVar[NamingServiceName] = NamingServiceName.ENS
    HASH_SCHEME: ClassVar[HashScheme] = ENS_HASH

    NETWORK_IDS: ClassVar[dict[int, str]] = {
        1: EthereumNetwork.MAINNET.value,
        3: EthereumNetwork.ROPSTEN.value,
        4: EthereumNetwork.RINKEBY.value,
        5: EthereumNetwork.GOERLI.value,
    }
    REGISTRY_ADDRESSES: ClassVar[dict[str, str]] = {
        network.value: ENS_REGISTRY for network in EthereumNetwork
    }

    CHAT_ID_KEY: ClassVar[str] = "gundb_username"
    CHAT_PK_KEY: ClassVar[str] = "gundb_public_key"
    HTTP_URL_KEY: ClassVar[str] = "url"
    EMAIL_KEY: ClassVar[str] = "email"

    DOMAIN_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[^-]*[^-]*\.(eth|luxe|xyz|kred)$")

    @classmethod
    def default_url(cls, network: str) -> str | None:
        return signed_infura_link(DEFAULT_INFURA_PROJECT_ID, network)

    @classmethod
    def supports_domain(cls, domain: str) -> bool:
        """Syntactic check shared with the API service."""
        return domain == "eth" or bool(cls.DOMAIN_PATTERN.match(domain))

    def is_supported_domain(self, domain: str) -> bool:
        return self.supports_domain(domain)

    # Registry reads

    def _node(self, domain: str) -> bytes:
        return decode_hex(self.namehash(domain))

    async def owner(self, domain: str) -> str | None:
        registry = self._ensure_supported_network()
        return await self._call_address(registry, "owner(bytes32)", [self._node(domain)])

    async def _resolver_address(self, node: bytes) -> str | None:
        registry = self._ensure_supported_network()
        return await self._call_address(registry, "resolver(bytes32)", [node])

    async def _ttl(self, node: bytes) -> int:
        registry = self._ensure_supported_network()
        result = await self._eth_call(registry, "ttl(bytes32)", [node], ["uint64"])
        return int(result[0]) if result else 0

    async def resolver(self, domain: str) -> str:
        resolver = await self._resolver_address(self._node(domain))
        if resolver is None:
            raise await self._ownership_error(domain)
        return resolver

    # Resolver reads

    async def address(self, domain: str, currency_ticker: str) -> str:
        ticker = currency_ticker.upper()
        coin_type = EVM_COIN_TYPES.get(ticker)
        if coin_type is None:
            raise ResolutionError(
                ResolutionErrorCode.UNSUPPORTED_CURRENCY, currency_ticker=currency_ticker
            )

        node = self._node(domain)
        resolver = await self.resolver(domain)
        address = await self._fetch_address(resolver, node, coin_type)
        if address is None:
            raise ResolutionError(
                ResolutionErrorCode.UNSPECIFIED_CURRENCY,
                domain=domain,
                currency_ticker=ticker,
            )
        return address

    async def _fetch_address(self, resolver: str, node: bytes, coin_type: int) -> str | None:
        if coin_type == EVM_COIN_TYPES["ETH"]:
            return await self._call_address(resolver, "addr(bytes32)", [node])

        result = await self._eth_call(
            resolver,
            "addr(bytes32,uint256)",
            [node, coin_type],
            ["bytes"],
            allow_revert=True,
        )
        raw = result[0] if result else b""
        if len(raw) != 20 or not any(raw):
            return None
        return to_checksum_address(raw)

    async def record(self, domain: str, key: str) -> str:
        resolver = await self.resolver(domain)
        value = await self._call_string(resolver, "text(bytes32,string)", [self._node(domain), key])
        if not value:
            raise ResolutionError(
                ResolutionErrorCode.RECORD_NOT_FOUND, domain=domain, record_name=key
            )
        return value

    async def ipfs_hash(self, domain: str) -> str:
        resolver = await self.resolver(domain)
        result = await self._eth_call(
            resolver,
            "contenthash(bytes32)",
            [self._node(domain)],
            ["bytes"],
            allow_revert=True,
        )
        ipfs_hash = decode_ipfs_contenthash(result[0]) if result else None
        if ipfs_hash is None:
            raise ResolutionError(
                ResolutionErrorCode.RECORD_NOT_FOUND, domain=domain, record_name="IPFS hash"
            )
        return ipfs_hash

    async def get_all_keys(self, domain: str) -> list[str]:
        raise ResolutionError(
            ResolutionErrorCode.UNSUPPORTED_METHOD, method="get_all_keys", domain=domain
        )

    async def resolve(self, domain: str) -> ResolutionResponse | None:
        self._ensure_supported_domain(domain)
        node = self._node(domain)

        owner = await self.owner(domain)
        if owner is None:
            return None

        addresses: dict[str, str] = {}
        resolver = await self._resolver_address(node)
        if resolver is not None:
            eth_address = await self._fetch_address(resolver, node, EVM_COIN_TYPES["ETH"])
            if eth_address:
                addresses["ETH"] = eth_address

        ttl = await self._ttl(node)
        return ResolutionResponse(
            addresses=addresses,
            meta=DomainMeta(owner=owner, type=self.NAME.value, ttl=ttl),
        )

    async def reverse(self, address: str, currency_ticker: str) -> str | None:
        """Look up the primary name recorded for an ETH address."""
        if currency_ticker.upper() != "ETH":
            raise ResolutionError(
                ResolutionErrorCode.UNSUPPORTED_CURRENCY, currency_ticker=currency_ticker
            )

        reverse_name = f"{address.lower().removeprefix('0x')}.addr.reverse"
        node = decode_hex(self.HASH_SCHEME.namehash(reverse_name))
        resolver = await self._resolver_address(node)
        if resolver is None:
            return None

        name = await self._call_string(resolver, "name(bytes32)", [node])
        return name or None
