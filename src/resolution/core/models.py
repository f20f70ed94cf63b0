"""Domain models for resolved records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_URL = "https://unstoppabledomains.com/api/v1"


class DomainMeta(BaseModel):
    """Ownership metadata for a domain."""

    model_config = ConfigDict(frozen=True)

    owner: str | None = Field(default=None, description="Owner address")
    type: str = Field(default="", description="Naming service that holds the record")
    ttl: int = Field(default=0, description="Record time-to-live in seconds")


class IpfsRecords(BaseModel):
    """IPFS website records."""

    model_config = ConfigDict(frozen=True)

    html: str | None = Field(default=None, description="IPFS hash of the website")
    redirect_domain: str | None = Field(default=None, description="HTTP redirect target")


class WhoisRecords(BaseModel):
    """Whois records."""

    model_config = ConfigDict(frozen=True)

    email: str | None = None
    for_sale: bool | None = None


class GundbRecords(BaseModel):
    """Gun database chat identity."""

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    public_key: str | None = None


class ResolutionResponse(BaseModel):
    """Full record bundle for a domain."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    addresses: dict[str, str] = Field(
        default_factory=dict, description="Currency ticker to address"
    )
    meta: DomainMeta = Field(default_factory=DomainMeta)
    ipfs: IpfsRecords | None = None
    whois: WhoisRecords | None = None
    gundb: GundbRecords | None = None
    records: dict[str, str] = Field(
        default_factory=dict, description="Raw record key/value pairs"
    )

    @property
    def is_claimed(self) -> bool:
        """Whether any owner holds this domain."""
        return self.meta.owner is not None

    @classmethod
    def from_records(
        cls,
        records: dict[str, str],
        *,
        owner: str | None,
        service_type: str,
        ttl: int = 0,
    ) -> ResolutionResponse:
        """Build a bundle from flat ``crypto.*``/``ipfs.*`` style record keys."""
        addresses = {}
        for key, value in records.items():
            parts = key.split(".")
            if len(parts) == 3 and parts[0] == "crypto" and parts[2] == "address" and value:
                addresses[parts[1]] = value

        return cls(
            addresses=addresses,
            meta=DomainMeta(owner=owner, type=service_type, ttl=ttl),
            ipfs=IpfsRecords(
                html=records.get("ipfs.html.value") or None,
                redirect_domain=records.get("ipfs.redirect_domain.value") or None,
            ),
            whois=WhoisRecords(email=records.get("whois.email.value") or None),
            gundb=GundbRecords(
                username=records.get("gundb.username.value") or None,
                public_key=records.get("gundb.public_key.value") or None,
            ),
            records=dict(records),
        )


UNCLAIMED_DOMAIN_RESPONSE = ResolutionResponse(
    addresses={},
    meta=DomainMeta(owner=None, type="", ttl=0),
)


@dataclass
class ApiConfig:
    """Configuration for the remote resolution API."""

    url: str = DEFAULT_API_URL
    timeout: float = 30.0
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class RequestArguments:
    """A single JSON-RPC style request handed to a provider."""

    method: str
    params: list[Any] = field(default_factory=list)

    def to_payload(self, request_id: int = 1) -> dict[str, Any]:
        """Render as a JSON-RPC 2.0 payload."""
        return {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": self.method,
            "params": self.params,
        }
