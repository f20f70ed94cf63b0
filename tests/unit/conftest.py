"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

from typing import Any

import pytest
import respx
from httpx import Response

from fakes import ETH_ADDRESS, OWNER_ADDRESS
from resolution.core.models import ApiConfig

API_URL = "https://resolution.test/api/v1"
NODE_URL = "https://node.test/rpc"


# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def api_config() -> ApiConfig:
    """Create an API config pointing at the mocked host."""
    return ApiConfig(url=API_URL, timeout=5.0)


# ============================================================================
# Mock Response Helpers
# ============================================================================


def mock_rpc_response(result: Any, request_id: int = 1) -> Response:
    """Create a successful JSON-RPC response."""
    return Response(
        status_code=200,
        json={"jsonrpc": "2.0", "id": request_id, "result": result},
    )


def mock_rpc_error(message: str, code: int = -32000, request_id: int = 1) -> Response:
    """Create a JSON-RPC error response."""
    return Response(
        status_code=200,
        json={"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}},
    )


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating mock responses."""
    return {
        "rpc": mock_rpc_response,
        "rpc_error": mock_rpc_error,
    }


# ============================================================================
# API Response Fixtures
# ============================================================================


@pytest.fixture
def api_claimed_response() -> dict[str, Any]:
    """Sample API response for a configured domain."""
    return {
        "addresses": {"ETH": ETH_ADDRESS, "BTC": "1EVt92qQnaLDcmVFtHivRJaunG2mf2C3mB"},
        "meta": {
            "owner": OWNER_ADDRESS,
            "type": "CNS",
            "ttl": 0,
            "namehash": "0x756e4e998dbffd803c21d23b06cd855cdc7a4b57706c95964a37e24b47c10fc9",
        },
        "ipfs": {"html": "QmVaAtQbi3EtsfpKoLzALm6vXphdi2KjMgxEDKeGg6wHuK"},
        "whois": {"email": "derainberk@gmail.com"},
        "records": {
            "crypto.ETH.address": ETH_ADDRESS,
            "crypto.BTC.address": "1EVt92qQnaLDcmVFtHivRJaunG2mf2C3mB",
            "ipfs.html.value": "QmVaAtQbi3EtsfpKoLzALm6vXphdi2KjMgxEDKeGg6wHuK",
            "whois.email.value": "derainberk@gmail.com",
        },
    }


@pytest.fixture
def api_unclaimed_response() -> dict[str, Any]:
    """Sample API response for a domain nobody owns."""
    return {
        "addresses": {},
        "meta": {"owner": None, "type": "", "ttl": 0},
        "records": {},
    }
