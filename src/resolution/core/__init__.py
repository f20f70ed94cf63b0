"""Core types, models and helpers shared by every naming service."""

from resolution.core.exceptions import (
    ConfigurationError,
    ProviderError,
    ResolutionError,
    ResolutionLibraryError,
)
from resolution.core.models import (
    UNCLAIMED_DOMAIN_RESPONSE,
    ApiConfig,
    RequestArguments,
    ResolutionResponse,
)
from resolution.core.normalization import (
    DISABLED,
    SourceDefinition,
    normalize_source,
    prepare_domain,
)
from resolution.core.types import NamingServiceName, ResolutionErrorCode

__all__ = [
    # Errors
    "ConfigurationError",
    "ProviderError",
    "ResolutionError",
    "ResolutionLibraryError",
    # Models
    "UNCLAIMED_DOMAIN_RESPONSE",
    "ApiConfig",
    "RequestArguments",
    "ResolutionResponse",
    # Normalization
    "DISABLED",
    "SourceDefinition",
    "normalize_source",
    "prepare_domain",
    # Types
    "NamingServiceName",
    "ResolutionErrorCode",
]
