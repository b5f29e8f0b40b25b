from __future__ import annotations

from dataclasses import dataclass
import logging
import time

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
import httpx


logger = logging.getLogger(__name__)


# allowance(address,address)
ALLOWANCE_SELECTOR = bytes.fromhex("dd62ed3e")


class RpcCallError(RuntimeError):
    pass


@dataclass(frozen=True)
class RpcAllowanceClientSettings:
    rpc_url: str
    timeout_seconds: float
    max_retries: int = 1


def encode_allowance_call(owner: str, spender: str) -> str:
    try:
        args = encode(["address", "address"], [owner.lower(), spender.lower()])
    except EncodingError as exc:
        raise ValueError(f"Invalid allowance arguments: owner={owner} spender={spender}") from exc
    return "0x" + (ALLOWANCE_SELECTOR + args).hex()


def decode_allowance_result(result: str) -> int:
    raw = bytes.fromhex(result.removeprefix("0x"))
    if not raw:
        return 0
    try:
        (allowance,) = decode(["uint256"], raw)
    except DecodingError as exc:
        raise ValueError(f"Malformed allowance result: {result}") from exc
    return allowance


class RpcAllowanceClient:
    """Reads ERC-20 allowances with a plain ``eth_call``.

    A read that fails counts as zero allowance, so the caller plans a fresh
    approval instead of aborting the campaign.
    """

    def __init__(
        self,
        settings: RpcAllowanceClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport
        self._request_id = 0

    def get_allowance(self, *, owner: str, token_address: str, spender: str) -> int:
        try:
            result = self._eth_call(
                to=token_address,
                data=encode_allowance_call(owner, spender),
            )
            return decode_allowance_result(result)
        except (RpcCallError, ValueError) as exc:
            logger.warning(
                "rpc_allowance_client: allowance_read_failed token=%s owner=%s spender=%s error=%s",
                token_address,
                owner,
                spender,
                exc,
            )
            return 0

    def _eth_call(self, *, to: str, data: str) -> str:
        if not self._settings.rpc_url:
            raise RpcCallError("RPC_URL is not configured.")

        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            self._request_id += 1
            body = {
                "jsonrpc": "2.0",
                "id": self._request_id,
                "method": "eth_call",
                "params": [{"to": to, "data": data}, "latest"],
            }
            try:
                with httpx.Client(
                    timeout=self._settings.timeout_seconds,
                    transport=self._transport,
                ) as client:
                    response = client.post(self._settings.rpc_url, json=body)
                    response.raise_for_status()
                    payload = response.json()

                error = payload.get("error")
                if error:
                    raise RpcCallError(str(error.get("message", error)))
                result = payload.get("result")
                if not isinstance(result, str):
                    raise RpcCallError("eth_call returned no result.")
                return result
            except (httpx.HTTPError, RpcCallError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "rpc_allowance_client: eth_call_retry attempt=%s/%s error=%s",
                    attempt,
                    attempts,
                    exc,
                )
                time.sleep(delay)
                delay *= 2

        raise RpcCallError(f"eth_call failed after retries: {last_exc}") from last_exc
