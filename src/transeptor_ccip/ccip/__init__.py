"""CCIP message construction, fee settlement and submission."""

from .fees import (
    check_account_transfer,
    ensure_account_can_pay,
    ensure_balance,
    quote_fee,
    settle_fee,
)
from .messages import (
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
from .submit import recover_message_id, send_ccip_message, submit_message

__all__ = [
    # Message builder
    "build_message",
    "decode_extra_args",
    "encode_create_account_call",
    "encode_execute_payload",
    "encode_extra_args",
    "encode_increment_call",
    "encode_receiver",
    "function_selector",
    "select_fee_token",
    # Fees
    "check_account_transfer",
    "ensure_account_can_pay",
    "ensure_balance",
    "quote_fee",
    "settle_fee",
    # Submission
    "recover_message_id",
    "send_ccip_message",
    "submit_message",
]
