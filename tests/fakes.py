"""Test doubles and constants shared across test modules."""

from __future__ import annotations

from typing import Any, ClassVar

from eth_abi import encode
from eth_utils import encode_hex, function_signature_to_4byte_selector

from resolution.core.exceptions import ProviderError, ResolutionError
from resolution.core.hashing import CNS_HASH, HashScheme
from resolution.core.models import RequestArguments, ResolutionResponse
from resolution.core.types import NamingServiceName, ResolutionErrorCode
from resolution.naming.base import NamingService

# ============================================================================
# Test Data Constants
# ============================================================================

OWNER_ADDRESS = "0x8aad44321a86b170879d7a244c1e8d360c99dda8"
RESOLVER_ADDRESS = "0xb66dce2da6afaaa98f2013446dbcb0f4b0ab2842"
ETH_ADDRESS = "0x45b31e01aa6f42f0549ad482be81635ed3149abb"

ETH_NAMEHASH = "0x93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"
FOO_ETH_NAMEHASH = "0xde9b09fd7c5f901e23a3f19fecc54828e9c848539801e86591bd9801b019f84f"
CRYPTO_NAMEHASH = "0x0f4a10a4f46c288cea365fcf45cccf0e9d901b945b9829ccdb54c10dc3cb7a6f"


# ============================================================================
# Fake Naming Service
# ============================================================================


class FakeNamingService(NamingService):
    """In-memory naming service claiming every domain under ``suffix``."""

    HASH_SCHEME: ClassVar[HashScheme] = CNS_HASH

    def __init__(
        self,
        name: NamingServiceName,
        suffix: str,
        *,
        records: dict[str, dict[str, str]] | None = None,
        owners: dict[str, str] | None = None,
        network_ok: bool = True,
        error: Exception | None = None,
    ) -> None:
        self._name = name
        self.NAME = name  # type: ignore[misc]
        self.suffix = suffix
        self.records = records or {}
        self.owners = owners or {}
        self.network_ok = network_ok
        self.error = error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    @property
    def name(self) -> NamingServiceName:
        return self._name

    @property
    def priority(self) -> int:
        return self._name.priority

    def service_name(self, domain: str) -> NamingServiceName:
        return self._name

    def is_supported_domain(self, domain: str) -> bool:
        return domain == self.suffix or domain.endswith(f".{self.suffix}")

    def is_supported_network(self) -> bool:
        return self.network_ok

    def _track(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if self.error is not None:
            raise self.error

    def _domain_records(self, domain: str) -> dict[str, str]:
        if domain not in self.records:
            raise ResolutionError(ResolutionErrorCode.UNREGISTERED_DOMAIN, domain=domain)
        return self.records[domain]

    async def resolve(self, domain: str) -> ResolutionResponse | None:
        self._track("resolve", domain)
        if domain not in self.owners:
            return None
        return ResolutionResponse.from_records(
            self.records.get(domain, {}),
            owner=self.owners[domain],
            service_type=self._name.value,
        )

    async def address(self, domain: str, currency_ticker: str) -> str:
        self._track("address", domain, currency_ticker)
        key = f"crypto.{currency_ticker.upper()}.address"
        value = self._domain_records(domain).get(key)
        if not value:
            raise ResolutionError(
                ResolutionErrorCode.UNSPECIFIED_CURRENCY,
                domain=domain,
                currency_ticker=currency_ticker,
            )
        return value

    async def owner(self, domain: str) -> str | None:
        self._track("owner", domain)
        return self.owners.get(domain)

    async def resolver(self, domain: str) -> str:
        self._track("resolver", domain)
        self._domain_records(domain)
        return RESOLVER_ADDRESS

    async def record(self, domain: str, key: str) -> str:
        self._track("record", domain, key)
        value = self._domain_records(domain).get(key)
        if not value:
            raise ResolutionError(
                ResolutionErrorCode.RECORD_NOT_FOUND, domain=domain, record_name=key
            )
        return value

    async def get_all_keys(self, domain: str) -> list[str]:
        self._track("get_all_keys", domain)
        return list(self._domain_records(domain))

    async def reverse(self, address: str, currency_ticker: str) -> str | None:
        self._track("reverse", address, currency_ticker)
        return next((d for d, o in self.owners.items() if o == address), None)


# ============================================================================
# Fake Providers
# ============================================================================


class FakeEthereumProvider:
    """
    Answers ``eth_call`` by target contract and function selector.

    Register return values with ``on_call``; unknown calls return ``0x``
    the way a node does for an address without code.
    """

    def __init__(self) -> None:
        self._calls: dict[tuple[str, str], str | Exception] = {}
        self._logs: dict[str, list[dict[str, Any]]] = {}
        self.requests: list[RequestArguments] = []

    def on_call(
        self,
        to: str,
        signature: str,
        output_types: list[str],
        values: list[Any],
    ) -> None:
        selector = encode_hex(function_signature_to_4byte_selector(signature))
        self._calls[(to.lower(), selector)] = encode_hex(encode(output_types, values))

    def on_error(self, to: str, signature: str, error: Exception) -> None:
        selector = encode_hex(function_signature_to_4byte_selector(signature))
        self._calls[(to.lower(), selector)] = error

    def on_logs(self, topic: str, logs: list[dict[str, Any]]) -> None:
        self._logs[topic] = logs

    async def request(self, args: RequestArguments, network: str | None = None) -> Any:
        self.requests.append(args)
        if args.method == "eth_getLogs":
            return self._logs.get(args.params[0]["topics"][0], [])
        if args.method != "eth_call":
            raise ProviderError(f"Unexpected method {args.method}", method=args.method)

        transaction = args.params[0]
        answer = self._calls.get((transaction["to"].lower(), transaction["data"][:10]), "0x")
        if isinstance(answer, Exception):
            raise answer
        return answer

    def selectors_called(self) -> list[str]:
        return [a.params[0]["data"][:10] for a in self.requests if a.method == "eth_call"]


class FakeZilliqaProvider:
    """Answers ``GetSmartContractSubState`` from per-contract state maps."""

    def __init__(self) -> None:
        self.state: dict[str, dict[str, Any]] = {}
        self.requests: list[RequestArguments] = []
        self.error: Exception | None = None

    def set_state(self, contract: str, field: str, value: dict[str, Any]) -> None:
        self.state.setdefault(contract.lower().removeprefix("0x"), {})[field] = value

    async def request(self, args: RequestArguments, network: str | None = None) -> Any:
        self.requests.append(args)
        if self.error is not None:
            raise self.error
        contract, field, keys = args.params
        values = self.state.get(contract, {}).get(field)
        if values is None:
            return None
        if keys:
            values = {k: v for k, v in values.items() if k in keys}
        return {field: values}
