"""Resolution - blockchain domain name resolution across ENS, ZNS, CNS and a remote API."""

from resolution.client import Resolution
from resolution.config import ResolutionSettings, get_settings
from resolution.core.diagnostics import Diagnostic
from resolution.core.exceptions import (
    ConfigurationError,
    ProviderError,
    ResolutionError,
    ResolutionLibraryError,
)
from resolution.core.models import (
    UNCLAIMED_DOMAIN_RESPONSE,
    ApiConfig,
    ResolutionResponse,
)
from resolution.core.normalization import DISABLED, SourceDefinition
from resolution.core.types import NamingServiceName, ResolutionErrorCode
from resolution.naming import Cns, Ens, NamingService, Udapi, Zns
from resolution.providers import HttpProvider, Provider

__version__ = "0.1.0"
__all__ = [
    # Client
    "Resolution",
    # Config
    "ApiConfig",
    "DISABLED",
    "ResolutionSettings",
    "SourceDefinition",
    "get_settings",
    # Types
    "NamingServiceName",
    "ResolutionErrorCode",
    # Models
    "ResolutionResponse",
    "UNCLAIMED_DOMAIN_RESPONSE",
    # Errors
    "ConfigurationError",
    "ProviderError",
    "ResolutionError",
    "ResolutionLibraryError",
    # Naming services
    "Cns",
    "Ens",
    "NamingService",
    "Udapi",
    "Zns",
    # Providers
    "HttpProvider",
    "Provider",
    # Diagnostics
    "Diagnostic",
    # Version
    "__version__",
]
