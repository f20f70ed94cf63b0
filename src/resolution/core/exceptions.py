"""Custom exception hierarchy for resolution."""

from typing import Any

from resolution.core.types import ResolutionErrorCode


class ResolutionLibraryError(Exception):
    """Base exception for all resolution library errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


_MESSAGES: dict[ResolutionErrorCode, str] = {
    ResolutionErrorCode.UNREGISTERED_DOMAIN: "Domain {domain} is not registered",
    ResolutionErrorCode.UNSPECIFIED_RESOLVER: "Domain {domain} is not configured",
    ResolutionErrorCode.UNSUPPORTED_DOMAIN: "Domain {domain} is not supported",
    ResolutionErrorCode.UNSUPPORTED_METHOD: "Method {method} is not supported for {domain}",
    ResolutionErrorCode.UNSUPPORTED_CURRENCY: "{currency_ticker} is not supported",
    ResolutionErrorCode.NAMING_SERVICE_DOWN: "{method} naming service is down at the moment",
    ResolutionErrorCode.UNSPECIFIED_CURRENCY: (
        "Domain {domain} has no {currency_ticker} attached to it"
    ),
    ResolutionErrorCode.RECORD_NOT_FOUND: "No {record_name} record found for {domain}",
}


class _MissingDefault(dict):
    def __missing__(self, key: str) -> str:
        return "<unknown>"


class ResolutionError(ResolutionLibraryError):
    """
    A failure belonging to the resolution error taxonomy.

    The message is rendered from the code's template using ``details``:

        >>> str(ResolutionError(ResolutionErrorCode.UNSUPPORTED_DOMAIN, domain="a.b"))
        'Domain a.b is not supported'
    """

    def __init__(self, code: ResolutionErrorCode, **details: Any) -> None:
        message = _MESSAGES[code].format_map(_MissingDefault(details))
        super().__init__(message, details)
        self.code = code

    def __repr__(self) -> str:
        return f"ResolutionError(code={self.code.value}, message={self.message!r})"


class ConfigurationError(ResolutionLibraryError):
    """Malformed configuration. Raised at construction time only."""

    pass


class ProviderError(ResolutionLibraryError):
    """Transport-level failure while talking to a blockchain node or API."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.method = method
