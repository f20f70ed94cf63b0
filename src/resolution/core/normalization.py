"""Domain canonicalization and naming service source normalization."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Any, Final, Literal, TypeAlias

from resolution.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from resolution.providers.base import Provider


def prepare_domain(domain: str | None) -> str:
    """
    Canonicalize a domain for lookup: strip surrounding whitespace and lowercase.

    Idempotent; ``None`` and empty input become the empty string.
    """
    return domain.strip().lower() if domain else ""


@dataclass(frozen=True)
class SourceDefinition:
    """Normalized per-backend configuration."""

    url: str | None = None
    provider: Provider | None = None
    network: str | None = None


class _Disabled(Enum):
    DISABLED = "disabled"

    def __repr__(self) -> str:
        return "DISABLED"


DISABLED: Final = _Disabled.DISABLED
Disabled: TypeAlias = Literal[_Disabled.DISABLED]

NamingServiceSource: TypeAlias = bool | str | SourceDefinition | Mapping[str, Any] | None

_SOURCE_FIELDS = frozenset(f.name for f in fields(SourceDefinition))


def normalize_source(
    source: NamingServiceSource,
    provider: Provider | None = None,
) -> SourceDefinition | Disabled:
    """
    Turn a loosely-typed backend source into a SourceDefinition.

    Args:
        source: ``None`` or ``True`` (enabled with defaults), ``False``
            (disabled), a URL string, or an explicit descriptor given as a
            mapping or SourceDefinition.
        provider: Inherited provider, used unless the source sets its own.

    Returns:
        The normalized descriptor, or ``DISABLED``.

    Raises:
        ConfigurationError: If the source has an unsupported shape.
    """
    if source is None or source is True:
        return SourceDefinition(provider=provider)
    if source is False:
        return DISABLED
    if isinstance(source, str):
        return SourceDefinition(url=source)
    if isinstance(source, SourceDefinition):
        if source.provider is None and provider is not None:
            return SourceDefinition(url=source.url, provider=provider, network=source.network)
        return source
    if isinstance(source, Mapping):
        unknown = set(source) - _SOURCE_FIELDS
        if unknown:
            raise ConfigurationError(
                f"Unsupported configuration keys: {', '.join(sorted(unknown))}",
                details={"keys": sorted(unknown)},
            )
        merged: dict[str, Any] = {"provider": provider}
        merged.update(source)
        return SourceDefinition(**merged)

    raise ConfigurationError(
        "Unsupported configuration",
        details={"source_type": type(source).__name__},
    )
