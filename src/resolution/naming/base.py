"""Abstract naming service: the operation set every backend implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from resolution.core.exceptions import ResolutionError
from resolution.core.hashing import HashScheme
from resolution.core.models import ResolutionResponse
from resolution.core.types import NamingServiceName, ResolutionErrorCode


class NamingService(ABC):
    """
    Abstract base class for all naming services.

    Subclasses own their network and contract knowledge. Domain
    classification (``is_supported_domain``) and hashing are pure and
    synchronous; everything that reads records is a coroutine.

    Record helpers (``chat_id``, ``email``...) read the dotted record keys
    used by ZNS/CNS; services with another key scheme override the class
    attributes or the methods themselves.
    """

    NAME: ClassVar[NamingServiceName]
    HASH_SCHEME: ClassVar[HashScheme | None] = None

    CHAT_ID_KEY: ClassVar[str] = "gundb.username.value"
    CHAT_PK_KEY: ClassVar[str] = "gundb.public_key.value"
    IPFS_HASH_KEY: ClassVar[str] = "ipfs.html.value"
    HTTP_URL_KEY: ClassVar[str] = "ipfs.redirect_domain.value"
    EMAIL_KEY: ClassVar[str] = "whois.email.value"

    @property
    def name(self) -> NamingServiceName:
        """Identity tag of this naming service."""
        return self.NAME

    @property
    def priority(self) -> int:
        """Position in the fixed selection order (lower = tried first)."""
        return self.NAME.priority

    # Classification

    @abstractmethod
    def is_supported_domain(self, domain: str) -> bool:
        """Whether the domain belongs to this naming service. Never does I/O."""
        ...

    @abstractmethod
    def is_supported_network(self) -> bool:
        """Whether the configured network has a known deployment."""
        ...

    def service_name(self, domain: str) -> NamingServiceName:
        return self.NAME

    # Hashing

    def namehash(self, domain: str) -> str:
        """Compute the namehash of a domain."""
        self._ensure_supported_domain(domain)
        return self._hash_scheme().namehash(domain)

    def childhash(self, parent: str, label: str) -> str:
        """Compute the hash of ``label`` under the node ``parent``."""
        return self._hash_scheme().childhash(parent, label)

    def _hash_scheme(self) -> HashScheme:
        if self.HASH_SCHEME is None:
            raise ResolutionError(
                ResolutionErrorCode.UNSUPPORTED_METHOD,
                method="childhash",
                domain=self.NAME.value,
            )
        return self.HASH_SCHEME

    # Records

    @abstractmethod
    async def resolve(self, domain: str) -> ResolutionResponse | None:
        """Full record bundle, or None when the domain is unclaimed."""
        ...

    @abstractmethod
    async def address(self, domain: str, currency_ticker: str) -> str:
        """Address for the given currency; raises if none is attached."""
        ...

    @abstractmethod
    async def owner(self, domain: str) -> str | None:
        ...

    @abstractmethod
    async def resolver(self, domain: str) -> str:
        ...

    @abstractmethod
    async def record(self, domain: str, key: str) -> str:
        ...

    @abstractmethod
    async def get_all_keys(self, domain: str) -> list[str]:
        ...

    async def chat_id(self, domain: str) -> str:
        return await self.record(domain, self.CHAT_ID_KEY)

    async def chat_pk(self, domain: str) -> str:
        return await self.record(domain, self.CHAT_PK_KEY)

    async def ipfs_hash(self, domain: str) -> str:
        return await self.record(domain, self.IPFS_HASH_KEY)

    async def http_url(self, domain: str) -> str:
        return await self.record(domain, self.HTTP_URL_KEY)

    async def email(self, domain: str) -> str:
        return await self.record(domain, self.EMAIL_KEY)

    async def reverse(self, address: str, currency_ticker: str) -> str | None:
        """Domain pointing back at ``address``. Only some services support it."""
        raise ResolutionError(
            ResolutionErrorCode.UNSUPPORTED_METHOD,
            method="reverse",
            domain=address,
        )

    # Helpers

    def _ensure_supported_domain(self, domain: str) -> None:
        if not self.is_supported_domain(domain):
            raise ResolutionError(ResolutionErrorCode.UNSUPPORTED_DOMAIN, domain=domain)

    async def _ownership_error(self, domain: str) -> ResolutionError:
        """Explain a missing resolver: unregistered vs registered-but-unconfigured."""
        if await self.owner(domain) is None:
            return ResolutionError(ResolutionErrorCode.UNREGISTERED_DOMAIN, domain=domain)
        return ResolutionError(ResolutionErrorCode.UNSPECIFIED_RESOLVER, domain=domain)

    async def close(self) -> None:
        """Release any network resources held by this service."""
        return None

    async def __aenter__(self) -> NamingService:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.NAME.value})"
