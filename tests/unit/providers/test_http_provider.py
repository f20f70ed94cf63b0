"""Tests for the JSON-RPC over HTTP provider."""

from __future__ import annotations

import json

import httpx
import pytest
import respx
from httpx import Response

from resolution.core.exceptions import ProviderError
from resolution.core.models import RequestArguments
from resolution.providers.base import Provider
from resolution.providers.http import HttpProvider, unwrap_rpc_response

NODE_URL = "https://node.test/rpc"


@pytest.fixture
def provider() -> HttpProvider:
    return HttpProvider(NODE_URL, timeout=5.0)


class TestHttpProvider:
    """Tests for HttpProvider.request."""

    def test_is_provider(self, provider: HttpProvider):
        assert isinstance(provider, Provider)

    @respx.mock
    async def test_posts_json_rpc(self, provider: HttpProvider, mock_responses: dict):
        route = respx.post(NODE_URL).mock(return_value=mock_responses["rpc"]("0x01"))

        result = await provider.request(RequestArguments("eth_call", [{"to": "0x1"}, "latest"]))

        assert result == "0x01"
        body = json.loads(route.calls.last.request.content)
        assert body["jsonrpc"] == "2.0"
        assert body["method"] == "eth_call"
        assert body["params"] == [{"to": "0x1"}, "latest"]
        await provider.close()

    @respx.mock
    async def test_request_ids_increase(self, provider: HttpProvider, mock_responses: dict):
        route = respx.post(NODE_URL).mock(return_value=mock_responses["rpc"](None))

        await provider.request(RequestArguments("net_version"))
        await provider.request(RequestArguments("net_version"))

        ids = [json.loads(call.request.content)["id"] for call in route.calls]
        assert ids == [1, 2]
        await provider.close()

    @respx.mock
    async def test_user_agent(self, provider: HttpProvider, mock_responses: dict):
        route = respx.post(NODE_URL).mock(return_value=mock_responses["rpc"](None))
        await provider.request(RequestArguments("net_version"))
        assert route.calls.last.request.headers["User-Agent"].startswith("domain-resolution/")
        await provider.close()

    @respx.mock
    async def test_rpc_error(self, provider: HttpProvider, mock_responses: dict):
        respx.post(NODE_URL).mock(return_value=mock_responses["rpc_error"]("execution reverted"))

        with pytest.raises(ProviderError, match="execution reverted") as exc_info:
            await provider.request(RequestArguments("eth_call", [{}, "latest"]))
        assert exc_info.value.method == "eth_call"
        await provider.close()

    @pytest.mark.parametrize(
        "mock_kwargs",
        [
            {"return_value": Response(503)},
            {"return_value": Response(200, text="not json")},
            {"side_effect": httpx.ConnectTimeout("timed out")},
        ],
    )
    @respx.mock
    async def test_transport_failures(self, provider: HttpProvider, mock_kwargs: dict):
        respx.post(NODE_URL).mock(**mock_kwargs)
        with pytest.raises(ProviderError):
            await provider.request(RequestArguments("eth_call", [{}, "latest"]))
        await provider.close()

    async def test_close(self, mock_responses: dict, respx_mock: respx.MockRouter):
        respx_mock.post(NODE_URL).mock(return_value=mock_responses["rpc"]("0x"))
        async with HttpProvider(NODE_URL) as provider:
            await provider.request(RequestArguments("eth_call", [{}, "latest"]))
            assert provider._client is not None
        assert provider._client is None


class TestUnwrapRpcResponse:
    def test_result(self):
        assert unwrap_rpc_response({"jsonrpc": "2.0", "id": 1, "result": "0x"}, "eth_call") == "0x"

    def test_string_error(self):
        with pytest.raises(ProviderError, match="boom"):
            unwrap_rpc_response({"error": "boom"}, "eth_call")

    @pytest.mark.parametrize("body", [None, [], "0x"])
    def test_malformed(self, body):
        with pytest.raises(ProviderError, match="Malformed"):
            unwrap_rpc_response(body, "eth_call")
