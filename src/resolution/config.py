"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from resolution.core.models import DEFAULT_API_URL


class ResolutionSettings(BaseSettings):
    """Resolution configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="RESOLUTION_",
    )

    # Mode
    use_blockchain: bool = Field(
        default=True,
        description="Read records from chain; when false use the remote API",
    )

    # Ethereum (ENS, CNS)
    infura_project_id: str | None = Field(
        default=None,
        description="Infura project id used to build ENS/CNS endpoints",
    )
    ethereum_network: str = Field(
        default="mainnet",
        description="Ethereum network name or chain id",
    )
    ens_url: str | None = Field(
        default=None,
        description="Explicit ENS JSON-RPC endpoint (overrides Infura)",
    )
    cns_url: str | None = Field(
        default=None,
        description="Explicit CNS JSON-RPC endpoint (overrides Infura)",
    )

    # Zilliqa (ZNS)
    zns_url: str | None = Field(
        default=None,
        description="Zilliqa JSON-RPC endpoint",
    )
    zns_network: str = Field(
        default="mainnet",
        description="Zilliqa network name or chain id",
    )

    # Remote API
    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Resolution API base URL",
    )

    # Transport
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds for nodes and the API",
    )

    # App settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


@lru_cache
def get_settings() -> ResolutionSettings:
    """Get cached settings instance."""
    return ResolutionSettings()
