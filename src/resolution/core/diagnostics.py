"""Structured diagnostic events such as deprecation notices."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal, observational event raised by the library."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


DiagnosticObserver = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default observer: write the event to the library logger."""
    logger.warning(
        diagnostic.message,
        extra={"diagnostic_code": diagnostic.code, "diagnostic_details": diagnostic.details},
    )


WEB3_PROVIDER_DEPRECATED = Diagnostic(
    code="deprecated.web3_provider",
    message=(
        "Usage of `web3_provider` option is deprecated. "
        "Use `provider` option instead for each individual blockchain"
    ),
)

IPFS_REDIRECT_DEPRECATED = Diagnostic(
    code="deprecated.ipfs_redirect",
    message="Resolution.ipfs_redirect is deprecated, use Resolution.http_url instead",
)
