"""Construction of CCIP ``EVM2AnyMessage`` envelopes."""

from __future__ import annotations

from collections.abc import Sequence

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from web3 import Web3

from ..constants import DEFAULT_GAS_LIMIT, EVM_EXTRA_ARGS_V1_TAG, ZERO_ADDRESS
from ..exceptions import ValidationError
from ..types import CrossChainMessage, PayFeesIn, TokenAmount
from ..utils import to_checksum, to_uint

CREATE_ACCOUNT_SIGNATURE = "createAccount(address,uint256)"
INCREMENT_SIGNATURE = "increment()"


def function_selector(signature: str) -> bytes:
    return bytes(Web3.keccak(text=signature)[:4])


def encode_extra_args(gas_limit: int = DEFAULT_GAS_LIMIT) -> bytes:
    """Encode ``EVMExtraArgsV1(gasLimit, strict=false)`` with its version tag."""
    gas_limit = to_uint(gas_limit, field="gas_limit")
    return EVM_EXTRA_ARGS_V1_TAG + abi_encode(["uint256", "bool"], [gas_limit, False])


def decode_extra_args(data: bytes) -> tuple[int, bool]:
    if data[:4] != EVM_EXTRA_ARGS_V1_TAG:
        raise ValidationError(
            "Extra args are not tagged as EVMExtraArgsV1",
            field="extra_args",
            value=Web3.to_hex(data[:4]),
        )
    gas_limit, strict = abi_decode(["uint256", "bool"], data[4:])
    return int(gas_limit), bool(strict)


def encode_receiver(address: str) -> bytes:
    return abi_encode(["address"], [to_checksum(address, field="receiver")])


def encode_execute_payload(target: str, call_data: bytes, value: int = 0) -> bytes:
    """Payload a destination smart account decodes to relay ``target.call{value}(call_data)``."""
    return abi_encode(
        ["address", "uint256", "bytes"],
        [to_checksum(target, field="target"), value, call_data],
    )


def encode_create_account_call(owner: str, salt: int) -> bytes:
    return function_selector(CREATE_ACCOUNT_SIGNATURE) + abi_encode(
        ["address", "uint256"],
        [to_checksum(owner, field="owner"), to_uint(salt, field="salt")],
    )


def encode_increment_call() -> bytes:
    return function_selector(INCREMENT_SIGNATURE)


def select_fee_token(pay_fees_in: PayFeesIn, link_token: str) -> str:
    if pay_fees_in is PayFeesIn.LINK:
        return to_checksum(link_token, field="link_token")
    return ZERO_ADDRESS


def build_message(
    receiver: str,
    payload: bytes,
    *,
    pay_fees_in: PayFeesIn,
    link_token: str,
    token_amounts: Sequence[TokenAmount] = (),
    gas_limit: int = DEFAULT_GAS_LIMIT,
) -> CrossChainMessage:
    return CrossChainMessage(
        receiver=encode_receiver(receiver),
        payload=payload,
        extra_args=encode_extra_args(gas_limit),
        fee_token=select_fee_token(pay_fees_in, link_token),
        token_amounts=tuple(token_amounts),
    )
