from __future__ import annotations

from eth_abi import encode
from eth_abi.exceptions import EncodingError

from app.domain.entities.campaign import ApprovalCall
from app.domain.entities.token import ZERO_ADDRESS, TokenDescriptor
from app.domain.exceptions import ApprovalInputError


# approve(address,uint256)
APPROVE_SELECTOR = bytes.fromhex("095ea7b3")
MAX_UINT256 = 2**256 - 1


def encode_approve(spender: str, amount: int) -> str:
    # Lowercased so a mis-cased address is not rejected as a bad checksum.
    address = spender.lower() if isinstance(spender, str) else spender
    try:
        args = encode(["address", "uint256"], [address, amount])
    except EncodingError as exc:
        raise ApprovalInputError(f"Invalid approve arguments: spender={spender} amount={amount}") from exc
    return "0x" + (APPROVE_SELECTOR + args).hex()


def build_approve_calls(
    tokens: list[TokenDescriptor],
    amounts: list[int],
    allowances: dict[str, int],
    spender: str,
) -> list[ApprovalCall]:
    """Plan the approve calls needed before ``spender`` can pull ``amounts``.

    ``allowances`` is keyed by lowercase token address; missing entries count
    as zero. Tokens that already had an allowance are reset to zero first,
    since some tokens (USDT) reject changing a non-zero allowance.
    """
    if len(tokens) != len(amounts):
        raise ApprovalInputError("tokens and amounts must have the same length.")

    calls: list[ApprovalCall] = []
    for token, amount in zip(tokens, amounts):
        if token.address.lower() == ZERO_ADDRESS:
            continue
        if amount == 0:
            continue

        allowance = allowances.get(token.address.lower(), 0)
        if allowance >= amount:
            continue

        if allowance > 0:
            calls.append(
                ApprovalCall(
                    to=token.address,
                    spender=spender,
                    amount=0,
                    data=encode_approve(spender, 0),
                )
            )
        calls.append(
            ApprovalCall(
                to=token.address,
                spender=spender,
                amount=MAX_UINT256,
                data=encode_approve(spender, MAX_UINT256),
            )
        )
    return calls
