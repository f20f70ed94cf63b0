"""Contract reads over Ethereum JSON-RPC."""

from __future__ import annotations

import logging
from typing import Any

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import (
    decode_hex,
    encode_hex,
    event_signature_to_log_topic,
    function_signature_to_4byte_selector,
    to_checksum_address,
)

from resolution.core.exceptions import ProviderError
from resolution.core.models import RequestArguments
from resolution.naming.blockchain import BlockchainNamingService
from resolution.utils import is_null_address

logger = logging.getLogger(__name__)


def _argument_types(signature: str) -> list[str]:
    """``"get(string,uint256)"`` -> ``["string", "uint256"]``."""
    inner = signature[signature.index("(") + 1 : signature.rindex(")")]
    return [t for t in inner.split(",") if t]


REVERT_ERROR_CODES = frozenset({3, -32000})


def _is_revert(error: ProviderError) -> bool:
    """
    Whether a failed call reverted, as opposed to the node failing.

    JSON-RPC errors must carry a revert code as well as the message;
    errors raised by adapters have no code and match on the message alone.
    """
    if "revert" not in str(error).lower():
        return False
    rpc_error = (error.details or {}).get("error")
    if isinstance(rpc_error, dict) and "code" in rpc_error:
        return rpc_error["code"] in REVERT_ERROR_CODES
    return True


def encode_call(signature: str, args: list[Any]) -> str:
    """ABI-encode a function call as ``0x``-prefixed calldata."""
    selector = function_signature_to_4byte_selector(signature)
    return encode_hex(selector + encode(_argument_types(signature), args))


def event_topic(signature: str) -> str:
    """Topic hash identifying an event signature."""
    return encode_hex(event_signature_to_log_topic(signature))


class EthereumNamingService(BlockchainNamingService):
    """Blockchain naming service whose contracts live on an EVM chain."""

    async def _eth_call(
        self,
        to: str,
        signature: str,
        args: list[Any],
        output_types: list[str],
        *,
        allow_revert: bool = False,
    ) -> tuple[Any, ...] | None:
        """
        Call a view function and decode its return values.

        Returns None when the call returned no data, or reverted and
        ``allow_revert`` is set.
        """
        params = [{"to": to, "data": encode_call(signature, args)}, "latest"]
        try:
            raw = await self.provider.request(RequestArguments("eth_call", params), self.network)
        except ProviderError as e:
            if allow_revert and _is_revert(e):
                logger.debug("%s reverted on %s", signature, to)
                return None
            raise self._service_down("eth_call", e) from e

        if isinstance(raw, (bytes, bytearray)):
            data = bytes(raw)
        else:
            data = decode_hex(raw) if raw else b""
        if not data:
            return None
        try:
            return decode(output_types, data)
        except DecodingError as e:
            raise self._service_down(
                "eth_call", ProviderError(f"Undecodable result for {signature}: {e}")
            ) from e

    async def _call_address(self, to: str, signature: str, args: list[Any]) -> str | None:
        """Call a function returning one address; zero address becomes None."""
        result = await self._eth_call(to, signature, args, ["address"], allow_revert=True)
        if not result or is_null_address(result[0]):
            return None
        return to_checksum_address(result[0])

    async def _call_string(self, to: str, signature: str, args: list[Any]) -> str:
        result = await self._eth_call(to, signature, args, ["string"])
        return result[0] if result else ""

    async def _get_logs(self, address: str, topics: list[str | None]) -> list[dict[str, Any]]:
        log_filter = {
            "address": address,
            "fromBlock": "earliest",
            "toBlock": "latest",
            "topics": topics,
        }
        logs = await self._request("eth_getLogs", [log_filter])
        return list(logs or [])

