"""Naming service backed by the remote resolution HTTP API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, ClassVar

import httpx
from pydantic import ValidationError

from resolution.core.exceptions import ResolutionError
from resolution.core.models import ApiConfig, ResolutionResponse
from resolution.core.types import NamingServiceName, ResolutionErrorCode
from resolution.naming.base import NamingService
from resolution.naming.cns import Cns
from resolution.naming.ens import Ens
from resolution.naming.zns import Zns
from resolution.providers.http import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

# Blockchain families the API can answer for, in selection order
_FAMILIES: tuple[type[Ens] | type[Zns] | type[Cns], ...] = (Zns, Ens, Cns)


class Udapi(NamingService):
    """
    Remote API naming service.

    Answers for every domain family the blockchain services know about,
    returning the whole record bundle from one ``GET {url}/{domain}``.
    """

    NAME: ClassVar[NamingServiceName] = NamingServiceName.UDAPI

    def __init__(self, config: ApiConfig | None = None) -> None:
        self.config = config or ApiConfig()
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self.config.url

    def _family(self, domain: str) -> type[Ens] | type[Zns] | type[Cns] | None:
        return next((f for f in _FAMILIES if f.supports_domain(domain)), None)

    def is_supported_domain(self, domain: str) -> bool:
        return self._family(domain) is not None

    def is_supported_network(self) -> bool:
        return True

    def namehash(self, domain: str) -> str:
        """Hash with the algorithm of the blockchain the domain lives on."""
        family = self._family(domain)
        if family is None:
            raise ResolutionError(ResolutionErrorCode.UNSUPPORTED_DOMAIN, domain=domain)
        return family.HASH_SCHEME.namehash(domain)

    def childhash(self, parent: str, label: str) -> str:
        raise ResolutionError(
            ResolutionErrorCode.UNSUPPORTED_METHOD, method="childhash", domain=label
        )

    # HTTP

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "DefaultUserAgent": DEFAULT_USER_AGENT,
            "Accept": "application/json",
            **self.config.headers,
        }

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                headers=self._get_default_headers(),
                follow_redirects=True,
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            logger.warning("Resolution API request failed: %s", e)
            raise ResolutionError(
                ResolutionErrorCode.NAMING_SERVICE_DOWN,
                method=self.NAME.value,
                reason=str(e),
            ) from e

    async def _fetch(self, domain: str) -> ResolutionResponse:
        self._ensure_supported_domain(domain)
        async with self._get_client() as client:
            response = await client.get(f"{self.url.rstrip('/')}/{domain}")
            response.raise_for_status()

        try:
            return ResolutionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ResolutionError(
                ResolutionErrorCode.NAMING_SERVICE_DOWN,
                method=self.NAME.value,
                reason=f"Malformed response: {e}",
            ) from e

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # Records

    async def resolve(self, domain: str) -> ResolutionResponse | None:
        response = await self._fetch(domain)
        return response if response.is_claimed else None

    async def _claimed(self, domain: str) -> ResolutionResponse:
        response = await self._fetch(domain)
        if not response.is_claimed:
            raise ResolutionError(ResolutionErrorCode.UNREGISTERED_DOMAIN, domain=domain)
        return response

    async def address(self, domain: str, currency_ticker: str) -> str:
        ticker = currency_ticker.upper()
        response = await self._claimed(domain)
        address = response.addresses.get(ticker)
        if not address:
            raise ResolutionError(
                ResolutionErrorCode.UNSPECIFIED_CURRENCY,
                domain=domain,
                currency_ticker=ticker,
            )
        return address

    async def owner(self, domain: str) -> str | None:
        response = await self._fetch(domain)
        return response.meta.owner

    async def resolver(self, domain: str) -> str:
        raise ResolutionError(
            ResolutionErrorCode.UNSUPPORTED_METHOD, method="resolver", domain=domain
        )

    async def record(self, domain: str, key: str) -> str:
        response = await self._claimed(domain)
        value = response.records.get(key)
        if not value:
            raise ResolutionError(
                ResolutionErrorCode.RECORD_NOT_FOUND, domain=domain, record_name=key
            )
        return value

    async def _bundled(self, domain: str, section: str, field: str, key: str) -> str:
        """Read a typed bundle field such as ``ipfs.html``, else the raw ``key`` record."""
        response = await self._claimed(domain)
        records = getattr(response, section)
        value = getattr(records, field) if records is not None else None
        value = value or response.records.get(key)
        if not value:
            raise ResolutionError(
                ResolutionErrorCode.RECORD_NOT_FOUND, domain=domain, record_name=key
            )
        return value

    async def chat_id(self, domain: str) -> str:
        return await self._bundled(domain, "gundb", "username", self.CHAT_ID_KEY)

    async def chat_pk(self, domain: str) -> str:
        return await self._bundled(domain, "gundb", "public_key", self.CHAT_PK_KEY)

    async def ipfs_hash(self, domain: str) -> str:
        return await self._bundled(domain, "ipfs", "html", self.IPFS_HASH_KEY)

    async def http_url(self, domain: str) -> str:
        return await self._bundled(domain, "ipfs", "redirect_domain", self.HTTP_URL_KEY)

    async def email(self, domain: str) -> str:
        return await self._bundled(domain, "whois", "email", self.EMAIL_KEY)

    async def get_all_keys(self, domain: str) -> list[str]:
        response = await self._claimed(domain)
        return list(response.records)

    def __repr__(self) -> str:
        return f"Udapi(url={self.url!r})"
