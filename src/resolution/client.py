"""Resolution router: picks the naming service for a domain and forwards calls."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from resolution.config import ResolutionSettings
from resolution.core.diagnostics import (
    IPFS_REDIRECT_DEPRECATED,
    WEB3_PROVIDER_DEPRECATED,
    Diagnostic,
    DiagnosticObserver,
    log_diagnostic,
)
from resolution.core.exceptions import ConfigurationError, ResolutionError
from resolution.core.models import UNCLAIMED_DOMAIN_RESPONSE, ApiConfig, ResolutionResponse
from resolution.core.normalization import (
    DISABLED,
    NamingServiceSource,
    SourceDefinition,
    normalize_source,
    prepare_domain,
)
from resolution.core.types import NamingServiceName, ResolutionErrorCode
from resolution.naming.api import Udapi
from resolution.naming.base import NamingService
from resolution.naming.cns import Cns
from resolution.naming.ens import Ens
from resolution.naming.zns import Zns
from resolution.providers import adapters
from resolution.providers.base import Provider
from resolution.utils import signed_infura_link

logger = logging.getLogger(__name__)

_BLOCKCHAIN_KEYS = frozenset({"ens", "zns", "cns", "web3_provider"})


class Resolution:
    """
    Blockchain domain resolution.

    Holds either the blockchain naming services (ENS, ZNS, CNS) or the
    single remote API service, fixed at construction. Every public call
    canonicalizes the domain, picks the first service (in ENS, ZNS, CNS
    order) that supports it, and forwards the call unchanged.

    Usage:
        resolution = Resolution(blockchain={
            "ens": {"url": "https://mainnet.infura.io/v3/<project>", "network": "mainnet"},
        })
        address = await resolution.address("brad.eth", "ETH")

    Pass ``blockchain=False`` (or only an ``api`` config) to use the API.
    """

    def __init__(
        self,
        blockchain: bool | Mapping[str, Any] | None = None,
        api: ApiConfig | None = None,
        *,
        on_diagnostic: DiagnosticObserver | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the router.

        Args:
            blockchain: ``True`` for all blockchain services with defaults,
                ``False`` for API mode, or a mapping with optional ``ens``,
                ``zns``, ``cns`` sources and the deprecated ``web3_provider``.
                Omitted means blockchain mode unless ``api`` is given.
            api: Remote API configuration used in API mode.
            on_diagnostic: Observer for deprecation and other notices.
            timeout: HTTP timeout for services this router builds itself.

        Raises:
            ConfigurationError: If any source has an unsupported shape.
        """
        self._on_diagnostic = on_diagnostic or log_diagnostic

        if blockchain is None:
            blockchain = api is None

        if blockchain is False:
            services: list[NamingService] = [Udapi(api)]
        else:
            services = self._build_blockchain_services(
                {} if blockchain is True else blockchain, timeout
            )

        self._blockchain = blockchain is not False
        self._services: tuple[NamingService, ...] = tuple(services)
        logger.debug(
            "Resolution configured with %s",
            ", ".join(s.name.value for s in self._services) or "no naming services",
        )

    def _build_blockchain_services(
        self,
        blockchain: Mapping[str, Any],
        timeout: float,
    ) -> list[NamingService]:
        if not isinstance(blockchain, Mapping):
            raise ConfigurationError(
                "Unsupported blockchain configuration",
                details={"blockchain_type": type(blockchain).__name__},
            )
        unknown = set(blockchain) - _BLOCKCHAIN_KEYS
        if unknown:
            raise ConfigurationError(
                f"Unsupported blockchain options: {', '.join(sorted(unknown))}",
                details={"keys": sorted(unknown)},
            )

        web3_provider = blockchain.get("web3_provider")
        if web3_provider is not None:
            self._emit(WEB3_PROVIDER_DEPRECATED)

        # The legacy shared provider only ever applied to the Ethereum services
        sources: list[tuple[type[Ens] | type[Zns] | type[Cns], NamingServiceSource, Any]] = [
            (Ens, blockchain.get("ens"), web3_provider),
            (Zns, blockchain.get("zns"), None),
            (Cns, blockchain.get("cns"), web3_provider),
        ]

        services: list[NamingService] = []
        for service_cls, source, provider in sources:
            normalized = normalize_source(source, provider)
            if normalized is DISABLED:
                continue
            services.append(service_cls(normalized, timeout=timeout))
        return services

    # Alternate constructors

    @classmethod
    def from_naming_services(
        cls,
        services: Iterable[NamingService],
        *,
        on_diagnostic: DiagnosticObserver | None = None,
    ) -> Resolution:
        """
        Assemble a router from already-built naming services.

        Services are ordered by the fixed selection priority. The API service
        cannot be mixed with blockchain services.
        """
        ordered = sorted(services, key=lambda s: s.priority)
        is_api = [s.name == NamingServiceName.UDAPI for s in ordered]
        if any(is_api) and len(ordered) > 1:
            raise ConfigurationError(
                "The API naming service cannot be combined with blockchain services"
            )

        resolution = cls.__new__(cls)
        resolution._on_diagnostic = on_diagnostic or log_diagnostic
        resolution._blockchain = not any(is_api)
        resolution._services = tuple(ordered)
        return resolution

    @classmethod
    def infura(cls, project_id: str, network: str = "mainnet") -> Resolution:
        """Create a resolution with Infura endpoints for ENS and CNS."""
        url = signed_infura_link(project_id, network)
        return cls(
            blockchain={
                "ens": {"url": url, "network": network},
                "cns": {"url": url, "network": network},
            }
        )

    @classmethod
    def from_eip1193_provider(cls, provider: Provider) -> Resolution:
        """Create a resolution that sends ENS and CNS requests through ``provider``."""
        return cls(
            blockchain={"zns": True, "ens": {"provider": provider}, "cns": {"provider": provider}}
        )

    @classmethod
    def from_web3_version0_provider(cls, provider: Any) -> Resolution:
        """Create from a provider implementing ``send_async(payload, callback)``."""
        return cls.from_eip1193_provider(adapters.from_web3_version0_provider(provider))

    @classmethod
    def from_web3_version1_provider(cls, provider: Any) -> Resolution:
        """Create from a provider implementing ``send(payload, callback)``."""
        return cls.from_eip1193_provider(adapters.from_web3_version1_provider(provider))

    @classmethod
    def from_ethers_provider(cls, provider: Any) -> Resolution:
        """Create from a provider exposing an awaitable ``call(transaction)``."""
        return cls.from_eip1193_provider(adapters.from_ethers_provider(provider))

    @classmethod
    def from_settings(cls, settings: ResolutionSettings) -> Resolution:
        """Create a resolution configured from environment settings."""
        logging.getLogger("resolution").setLevel(settings.log_level.upper())

        if not settings.use_blockchain:
            return cls(
                blockchain=False,
                api=ApiConfig(url=settings.api_url, timeout=settings.request_timeout),
            )

        infura_url = (
            signed_infura_link(settings.infura_project_id, settings.ethereum_network)
            if settings.infura_project_id
            else None
        )
        return cls(
            blockchain={
                "ens": SourceDefinition(
                    url=settings.ens_url or infura_url, network=settings.ethereum_network
                ),
                "cns": SourceDefinition(
                    url=settings.cns_url or infura_url, network=settings.ethereum_network
                ),
                "zns": SourceDefinition(url=settings.zns_url, network=settings.zns_network),
            },
            timeout=settings.request_timeout,
        )

    # Introspection

    @property
    def blockchain(self) -> bool:
        """Whether this instance reads records from chain rather than the API."""
        return self._blockchain

    @property
    def naming_services(self) -> tuple[NamingService, ...]:
        """Configured services in selection order."""
        return self._services

    @property
    def ens(self) -> Ens | None:
        return self._find(NamingServiceName.ENS)  # type: ignore[return-value]

    @property
    def zns(self) -> Zns | None:
        return self._find(NamingServiceName.ZNS)  # type: ignore[return-value]

    @property
    def cns(self) -> Cns | None:
        return self._find(NamingServiceName.CNS)  # type: ignore[return-value]

    @property
    def api(self) -> Udapi | None:
        return self._find(NamingServiceName.UDAPI)  # type: ignore[return-value]

    # Records

    async def resolve(self, domain: str) -> ResolutionResponse:
        """
        Resolve the full record bundle of a domain.

        Returns UNCLAIMED_DOMAIN_RESPONSE when the service reports no claim.

        Raises:
            ResolutionError: UnsupportedDomain, or whatever the service raises.
        """
        domain = prepare_domain(domain)
        result = await self.get_naming_method_or_throw(domain).resolve(domain)
        return result or UNCLAIMED_DOMAIN_RESPONSE

    async def address(self, domain: str, currency_ticker: str) -> str | None:
        """
        Resolve a currency address, or None if it cannot be resolved.

        Only ResolutionError is converted to None; any other error propagates.
        """
        try:
            return await self.address_or_throw(domain, currency_ticker)
        except ResolutionError as e:
            logger.debug("address(%s, %s) -> None: %s", domain, currency_ticker, e)
            return None

    async def address_or_throw(self, domain: str, currency_ticker: str) -> str:
        """
        Resolve a currency address.

        Raises:
            ResolutionError: If the domain is unsupported or has no such address.
        """
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).address(domain, currency_ticker)

    async def chat_id(self, domain: str) -> str:
        """Resolve the gundb chat id."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).chat_id(domain)

    async def chat_pk(self, domain: str) -> str:
        """Resolve the gundb public key."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).chat_pk(domain)

    async def ipfs_hash(self, domain: str) -> str:
        """Resolve the IPFS hash of the domain's website."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).ipfs_hash(domain)

    async def http_url(self, domain: str) -> str:
        """Resolve the HTTP redirect url."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).http_url(domain)

    async def ipfs_redirect(self, domain: str) -> str:
        """Deprecated alias for the ``ipfs.redirect_domain.value`` record."""
        self._emit(IPFS_REDIRECT_DEPRECATED)
        return await self.record(domain, "ipfs.redirect_domain.value")

    async def email(self, domain: str) -> str:
        """Resolve the whois email."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).email(domain)

    async def resolver(self, domain: str) -> str:
        """Resolve the resolver contract address."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).resolver(domain)

    async def owner(self, domain: str) -> str | None:
        """Resolve the owner address; None for a domain nobody owns."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).owner(domain) or None

    async def record(self, domain: str, key: str) -> str:
        """Resolve an arbitrary record by key."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).record(domain, key)

    async def get_all_keys(self, domain: str) -> list[str]:
        """List every record key set on the domain."""
        domain = prepare_domain(domain)
        return await self.get_naming_method_or_throw(domain).get_all_keys(domain)

    async def reverse(self, address: str, currency_ticker: str) -> str | None:
        """
        Find the domain an address points back to. ENS only.

        Raises:
            ResolutionError: NamingServiceDown if ENS is not configured.
        """
        return await self.find_naming_service(NamingServiceName.ENS).reverse(
            address, currency_ticker
        )

    # Hashing

    def namehash(self, domain: str) -> str:
        """Hash a domain with the algorithm of the service that owns it."""
        domain = prepare_domain(domain)
        return self.get_naming_method_or_throw(domain).namehash(domain)

    def childhash(self, parent: str, label: str, method: NamingServiceName | str) -> str:
        """Hash ``label`` under ``parent`` using the given service's algorithm."""
        try:
            name = NamingServiceName(str(method).upper())
        except ValueError as e:
            raise ResolutionError(
                ResolutionErrorCode.NAMING_SERVICE_DOWN, method=str(method)
            ) from e
        return self.find_naming_service(name).childhash(parent, label)

    def is_valid_hash(self, domain: str, hash: str) -> bool:
        """Whether ``hash`` is exactly the namehash of ``domain``."""
        return self.namehash(domain) == hash

    # Classification

    def is_supported_domain(self, domain: str) -> bool:
        """Whether any configured service supports the domain."""
        return self.get_naming_method(domain) is not None

    def is_supported_domain_in_network(self, domain: str) -> bool:
        """Whether a service supports the domain and targets a usable network."""
        method = self.get_naming_method(domain)
        return method is not None and method.is_supported_network()

    def service_name(self, domain: str) -> NamingServiceName:
        """Name of the service that would resolve the domain."""
        domain = prepare_domain(domain)
        return self.get_naming_method_or_throw(domain).service_name(domain)

    # Selection

    def get_naming_method(self, domain: str) -> NamingService | None:
        """First service in priority order that supports the domain, if any."""
        domain = prepare_domain(domain)
        return next((s for s in self._services if s.is_supported_domain(domain)), None)

    def get_naming_method_or_throw(self, domain: str) -> NamingService:
        domain = prepare_domain(domain)
        method = self.get_naming_method(domain)
        if method is None:
            raise ResolutionError(ResolutionErrorCode.UNSUPPORTED_DOMAIN, domain=domain)
        logger.debug("%s -> %s", domain, method.name.value)
        return method

    def _find(self, name: NamingServiceName) -> NamingService | None:
        return next((s for s in self._services if s.name == name), None)

    def find_naming_service(self, name: NamingServiceName) -> NamingService:
        """Configured service with the given name, regardless of domain."""
        service = self._find(name)
        if service is None:
            raise ResolutionError(ResolutionErrorCode.NAMING_SERVICE_DOWN, method=name.value)
        return service

    # Lifecycle

    def _emit(self, diagnostic: Diagnostic) -> None:
        self._on_diagnostic(diagnostic)

    async def close(self) -> None:
        """Close all naming services."""
        for service in self._services:
            await service.close()

    async def __aenter__(self) -> Resolution:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        names = ", ".join(s.name.value for s in self._services)
        return f"Resolution(blockchain={self._blockchain}, services=[{names}])"
