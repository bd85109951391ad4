from __future__ import annotations

import pytest
from eth_abi import decode as abi_decode
from web3 import Web3

from transeptor_ccip.ccip.messages import (
    build_message,
    decode_extra_args,
    encode_create_account_call,
    encode_execute_payload,
    encode_extra_args,
    encode_increment_call,
    encode_receiver,
    function_selector,
    select_fee_token,
)
from transeptor_ccip.constants import (
    DEFAULT_GAS_LIMIT,
    EVM_EXTRA_ARGS_V1_SIGNATURE,
    EVM_EXTRA_ARGS_V1_TAG,
    ZERO_ADDRESS,
)
from transeptor_ccip.exceptions import ValidationError
from transeptor_ccip.types import PayFeesIn, TokenAmount

from .conftest import COUNTER, FACTORY_RECEIVER, SIGNER, SOURCE_LINK, TOKEN


def test_extra_args_tag_matches_signature_hash() -> None:
    assert EVM_EXTRA_ARGS_V1_TAG == function_selector(EVM_EXTRA_ARGS_V1_SIGNATURE)
    assert EVM_EXTRA_ARGS_V1_TAG.hex() == "97a657c9"


def test_extra_args_layout_for_default_gas_limit() -> None:
    encoded = encode_extra_args()

    assert len(encoded) == 4 + 64
    assert encoded[:4] == EVM_EXTRA_ARGS_V1_TAG
    assert int.from_bytes(encoded[4:36], "big") == DEFAULT_GAS_LIMIT
    assert encoded[36:] == b"\x00" * 32


def test_extra_args_are_deterministic() -> None:
    assert encode_extra_args(300_000) == encode_extra_args(300_000)
    assert encode_extra_args(300_000) != encode_extra_args(300_001)


def test_decode_extra_args_reads_gas_limit() -> None:
    assert decode_extra_args(encode_extra_args(123_456)) == (123_456, False)


def test_decode_extra_args_rejects_unknown_tag() -> None:
    data = b"\x00\x00\x00\x00" + encode_extra_args()[4:]

    with pytest.raises(ValidationError) as exc:
        decode_extra_args(data)

    assert exc.value.field == "extra_args"


def test_negative_gas_limit_is_rejected() -> None:
    with pytest.raises(ValidationError):
        encode_extra_args(-1)


def test_receiver_is_abi_encoded_address() -> None:
    encoded = encode_receiver(COUNTER)

    assert len(encoded) == 32
    assert abi_decode(["address"], encoded)[0] == COUNTER.lower()


def test_receiver_rejects_malformed_address() -> None:
    with pytest.raises(ValidationError) as exc:
        encode_receiver("0x1234")

    assert exc.value.field == "receiver"


def test_create_account_call_starts_with_selector() -> None:
    encoded = encode_create_account_call(SIGNER, 7)

    assert encoded[:4] == Web3.keccak(text="createAccount(address,uint256)")[:4]
    owner, salt = abi_decode(["address", "uint256"], encoded[4:])
    assert owner == SIGNER.lower()
    assert salt == 7


def test_increment_call_is_bare_selector() -> None:
    assert encode_increment_call() == bytes(Web3.keccak(text="increment()")[:4])


def test_execute_payload_decodes_to_target_value_and_data() -> None:
    payload = encode_execute_payload(COUNTER, encode_increment_call())

    target, value, call_data = abi_decode(["address", "uint256", "bytes"], payload)
    assert target == COUNTER.lower()
    assert value == 0
    assert call_data == encode_increment_call()


def test_fee_token_selection() -> None:
    assert select_fee_token(PayFeesIn.NATIVE, SOURCE_LINK) == ZERO_ADDRESS
    assert select_fee_token(PayFeesIn.LINK, SOURCE_LINK) == SOURCE_LINK


def test_build_message_for_native_fees() -> None:
    message = build_message(
        FACTORY_RECEIVER,
        b"\x01\x02",
        pay_fees_in=PayFeesIn.NATIVE,
        link_token=SOURCE_LINK,
        gas_limit=250_000,
    )

    assert message.pays_in_native
    assert message.token_amounts == ()
    assert message.payload == b"\x01\x02"
    assert decode_extra_args(message.extra_args) == (250_000, False)

    receiver, data, token_amounts, fee_token, extra_args = message.as_tuple()
    assert receiver == encode_receiver(FACTORY_RECEIVER)
    assert data == b"\x01\x02"
    assert token_amounts == []
    assert fee_token == ZERO_ADDRESS
    assert extra_args == message.extra_args


def test_build_message_for_link_fees_with_tokens() -> None:
    message = build_message(
        FACTORY_RECEIVER,
        b"",
        pay_fees_in=PayFeesIn.LINK,
        link_token=SOURCE_LINK,
        token_amounts=[TokenAmount(token=TOKEN, amount=5)],
    )

    assert not message.pays_in_native
    assert message.fee_token == SOURCE_LINK
    assert message.as_tuple()[2] == [(TOKEN, 5)]
    assert message.describe()["tokenAmounts"] == [{"token": TOKEN, "amount": 5}]
