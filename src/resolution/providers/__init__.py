"""Providers: how blockchain naming services reach a node."""

from resolution.providers.adapters import (
    AdaptedProvider,
    adapt_provider,
    from_ethers_provider,
    from_web3_version0_provider,
    from_web3_version1_provider,
)
from resolution.providers.base import Provider
from resolution.providers.http import HttpProvider

__all__ = [
    "AdaptedProvider",
    "HttpProvider",
    "Provider",
    "adapt_provider",
    "from_ethers_provider",
    "from_web3_version0_provider",
    "from_web3_version1_provider",
]
