"""CCIP tasks that create, drive and fund Transeptor smart accounts."""

from __future__ import annotations

import logging

from web3 import Web3

from ..ccip.fees import check_account_transfer, ensure_account_can_pay, quote_fee, settle_fee
from ..ccip.messages import (
    build_message,
    encode_create_account_call,
    encode_execute_payload,
    encode_increment_call,
)
from ..ccip.submit import recover_message_id, submit_message
from ..config import NetworkConfig
from ..console import info, spinner, success
from ..constants import DEFAULT_GAS_LIMIT, ZERO_ADDRESS
from ..exceptions import AuthorizationError, ValidationError
from ..types import (
    CrossChainMessage,
    FeeQuote,
    FeeSettlement,
    PayFeesIn,
    SendResult,
)
from ..utils import parse_bool, parse_pay_fees_in, same_address, to_checksum, to_uint
from .base import TaskEnvironment

logger = logging.getLogger(__name__)


def ccip_smart_account_deploy(
    env: TaskEnvironment,
    *,
    destination_blockchain: str,
    owner: str,
    salt: int | str,
    pay_fees_in: str | PayFeesIn,
    gas_limit: int = DEFAULT_GAS_LIMIT,
    router: str | None = None,
) -> SendResult:
    """Ask the destination factory receiver to ``createAccount(owner, salt)``."""
    fee_choice = parse_pay_fees_in(pay_fees_in)
    source = env.require_source_network()
    destination = env.destination(destination_blockchain)
    factory_receiver = destination.require_account_factory_receiver()
    router_address = to_checksum(router, field="router") if router else source.router

    message = build_message(
        factory_receiver,
        encode_create_account_call(owner, to_uint(salt, field="salt")),
        pay_fees_in=fee_choice,
        link_token=source.link_token,
        gas_limit=gas_limit,
    )
    return _send(
        env,
        source,
        destination,
        router_address,
        message,
        target=f"DestinationAccountFactoryReceiver {factory_receiver}",
    )


def ccip_smart_account_execute(
    env: TaskEnvironment,
    *,
    destination_blockchain: str,
    receiver: str,
    dest: str,
    pay_fees_in: str | PayFeesIn,
    gas_limit: int = DEFAULT_GAS_LIMIT,
    router: str | None = None,
    call_data: str | bytes | None = None,
) -> SendResult:
    """Make the smart account ``receiver`` on the destination chain call ``dest``.

    Without ``call_data`` the relayed call is ``BasicCounter.increment()`` and the
    counter's owner must be ``receiver``; that is read on the destination chain.
    """
    fee_choice = parse_pay_fees_in(pay_fees_in)
    source = env.require_source_network()
    destination = env.destination(destination_blockchain)
    receiver_address = to_checksum(receiver, field="receiver")
    target = to_checksum(dest, field="dest")
    router_address = to_checksum(router, field="router") if router else source.router

    if call_data is None:
        inner_call = encode_increment_call()
        counter_owner = env.reader_client(destination).owner_of(target)
        if not same_address(counter_owner, receiver_address):
            raise AuthorizationError(
                f"Counter owner {counter_owner} is not the same as receiver {receiver_address}",
                address=receiver_address,
                owner=counter_owner,
            )
    else:
        inner_call = _to_bytes(call_data)

    message = build_message(
        receiver_address,
        encode_execute_payload(target, inner_call),
        pay_fees_in=fee_choice,
        link_token=source.link_token,
        gas_limit=gas_limit,
    )
    return _send(
        env,
        source,
        destination,
        router_address,
        message,
        target=f"TranseptorAccount {receiver_address}",
    )


def ccip_smart_account_token_transfer(
    env: TaskEnvironment,
    *,
    destination_blockchain: str,
    receiver: str,
    token_address: str,
    sender: str,
    amount: int | str,
    is_receiver_eoa: bool | str,
    pay_fees_in: str | PayFeesIn,
) -> SendResult:
    """Have the source smart account ``sender`` send ``amount`` of a token cross-chain.

    The account pays the CCIP fee itself, so no approval is made by the signer.
    """
    fee_choice = parse_pay_fees_in(pay_fees_in)
    source = env.require_source_network()
    destination = env.destination(destination_blockchain)
    account = to_checksum(sender, field="sender")
    receiver_address = to_checksum(receiver, field="receiver")
    token = to_checksum(token_address, field="token_address")
    units = to_uint(amount, field="amount")
    receiver_is_eoa = parse_bool(is_receiver_eoa, field="is_receiver_eoa")
    selector = destination.chain_selector

    client = env.signer_client(source)
    check_account_transfer(client, account=account, chain_selector=selector, token=token)

    info("Calculating CCIP fees...")
    with spinner("Quoting..."):
        fee = client.account_token_transfer_fee(
            account, selector, receiver_address, token, units, receiver_is_eoa, fee_choice
        )
    fee_token = source.link_token if fee_choice is PayFeesIn.LINK else ZERO_ADDRESS
    quote = FeeQuote(amount=int(fee), pay_fees_in=fee_choice, fee_token=fee_token)
    info(f"Estimated fees ({quote.unit}): {quote.amount}")
    ensure_account_can_pay(client, source, account, quote)

    info(
        f"Attempting to transfer token {token} from {source.name} to {destination.name}. "
        f"Sender: {account}, Receiver: {receiver_address}"
    )
    with spinner("Sending..."):
        transaction = client.account_send_token(
            account, selector, receiver_address, token, units, receiver_is_eoa, fee_choice
        )
    success(f"Message sent, transaction hash: {transaction.tx_hash}")

    message_id = recover_message_id(client, transaction)
    _report_message_id(message_id)
    return SendResult(
        quote=quote,
        settlement=FeeSettlement(quote=quote),
        transaction=transaction,
        message_id=message_id,
        context={"account": account, "token": token, "amount": units},
    )


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------
def _send(
    env: TaskEnvironment,
    source: NetworkConfig,
    destination: NetworkConfig,
    router: str,
    message: CrossChainMessage,
    *,
    target: str,
) -> SendResult:
    client = env.signer_client(source)
    selector = destination.chain_selector

    info("Calculating CCIP fees...")
    with spinner("Quoting..."):
        quote = quote_fee(client, router, selector, message)
    info(f"Estimated fees ({quote.unit}): {quote.amount}")

    with spinner("Settling fees..."):
        settlement = settle_fee(client, source, router, quote)
    if settlement.approval is not None:
        success(f"Approved successfully, transaction hash: {settlement.approval.tx_hash}")

    with spinner("Sending CCIP message..."):
        transaction = submit_message(client, router, selector, message, settlement)
    logger.info(
        "Sent %s from %s on %s to %s on %s",
        message.describe(),
        client.address,
        source.name,
        target,
        destination.name,
    )
    success(f"Sent successfully! Transaction hash: {transaction.tx_hash}")

    message_id = recover_message_id(client, transaction)
    _report_message_id(message_id)
    return SendResult(
        quote=quote,
        settlement=settlement,
        transaction=transaction,
        message=message,
        message_id=message_id,
        context={"source": source.name, "destination": destination.name},
    )


def _report_message_id(message_id: str | None) -> None:
    if message_id:
        success(
            "You can now monitor the message status via CCIP Explorer by searching for "
            f"CCIP Message ID: {message_id}"
        )


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    try:
        return Web3.to_bytes(hexstr=value)  # type: ignore[arg-type]
    except ValueError as exc:
        raise ValidationError(
            "call_data must be 0x-prefixed hex", field="call_data", value=value
        ) from exc
