"""Shared test fixtures for all tests."""

from __future__ import annotations

from typing import Any

import pytest

from fakes import ETH_ADDRESS, OWNER_ADDRESS, FakeEthereumProvider, FakeZilliqaProvider
from resolution.core.diagnostics import Diagnostic
from resolution.core.models import DomainMeta, RequestArguments, ResolutionResponse

# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def brad_records() -> dict[str, str]:
    """Records of a fully configured domain."""
    return {
        "crypto.ETH.address": ETH_ADDRESS,
        "crypto.BTC.address": "bc1q359khn0phg58xgezyqsuuaha28zkwx047c0c3y",
        "ipfs.html.value": "QmdyBw5oTgCtTLQ18PbDvPL8iaLoEPhSyzD91q9XmgmAjb",
        "ipfs.redirect_domain.value": "https://abbfe6z95qov3d40hf6j30g7auo7afhp.mypinata.cloud",
        "whois.email.value": "matt+test@unstoppabledomains.com",
        "gundb.username.value": "0x8912623832e174f2eb1f59cc3b587444d619376ad5bf10070e937e0dc22b9ffb",
        "gundb.public_key.value": "pqeBHabDQdCHhbdivgNEc74QO-x8CPGXq4PKWgfIzhY.7WJR5cZFuSyh1bFwx0GWzjmrim0T5Y6Bp0SSK0im3nI",
    }


@pytest.fixture
def sample_response() -> ResolutionResponse:
    """A claimed record bundle."""
    return ResolutionResponse(
        addresses={"ETH": ETH_ADDRESS},
        meta=DomainMeta(owner=OWNER_ADDRESS, type="CNS", ttl=0),
    )


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def ethereum_provider() -> FakeEthereumProvider:
    """In-memory Ethereum node."""
    return FakeEthereumProvider()


@pytest.fixture
def zilliqa_provider() -> FakeZilliqaProvider:
    """In-memory Zilliqa node."""
    return FakeZilliqaProvider()


@pytest.fixture
def recording_provider():
    """Provider stub that records every request and answers with empty data."""

    class RecordingProvider:
        def __init__(self) -> None:
            self.requests: list[tuple[RequestArguments, str | None]] = []

        async def request(self, args: RequestArguments, network: str | None = None) -> Any:
            self.requests.append((args, network))
            return "0x"

    return RecordingProvider()


# ============================================================================
# Diagnostics Fixtures
# ============================================================================


@pytest.fixture
def diagnostics() -> list[Diagnostic]:
    """Collects diagnostics emitted through an injected observer."""
    return []
