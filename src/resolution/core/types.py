"""Core enums and type definitions."""

from enum import StrEnum


class NamingServiceName(StrEnum):
    """Known naming services a domain can be resolved by."""

    ENS = "ENS"
    ZNS = "ZNS"
    CNS = "CNS"
    UDAPI = "UDAPI"

    @property
    def priority(self) -> int:
        """Position in the fixed selection order (lower = tried first)."""
        return _PRIORITY.index(self)


# Blockchain services are tried in this exact order; the API service only
# ever runs on its own.
_PRIORITY: tuple[NamingServiceName, ...] = (
    NamingServiceName.ENS,
    NamingServiceName.ZNS,
    NamingServiceName.CNS,
    NamingServiceName.UDAPI,
)


class ResolutionErrorCode(StrEnum):
    """Kinds of resolution failures."""

    UNREGISTERED_DOMAIN = "UnregisteredDomain"
    UNSPECIFIED_RESOLVER = "UnspecifiedResolver"
    UNSUPPORTED_DOMAIN = "UnsupportedDomain"
    UNSUPPORTED_METHOD = "UnsupportedMethod"
    UNSUPPORTED_CURRENCY = "UnsupportedCurrency"
    NAMING_SERVICE_DOWN = "NamingServiceDown"
    UNSPECIFIED_CURRENCY = "UnspecifiedCurrency"
    RECORD_NOT_FOUND = "RecordNotFound"


class EthereumNetwork(StrEnum):
    """Ethereum networks with a known ENS deployment."""

    MAINNET = "mainnet"
    ROPSTEN = "ropsten"
    RINKEBY = "rinkeby"
    GOERLI = "goerli"


class ZilliqaNetwork(StrEnum):
    """Zilliqa networks."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
