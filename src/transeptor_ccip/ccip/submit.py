"""Submission of CCIP messages and the end-to-end send pipeline."""

from __future__ import annotations

import logging

from ..chain.base import ChainClient
from ..config import NetworkConfig
from ..exceptions import TransactionError, TranseptorError
from ..types import CrossChainMessage, FeeSettlement, SendResult, TransactionResult
from .fees import quote_fee, settle_fee

logger = logging.getLogger(__name__)


def submit_message(
    client: ChainClient,
    router: str,
    chain_selector: int,
    message: CrossChainMessage,
    settlement: FeeSettlement,
) -> TransactionResult:
    """Call ``router.ccipSend`` with the settled value and wait until it is mined."""
    logger.debug(
        "Stage CCIP [%s]: submit (value=%s, fee_token=%s)",
        chain_selector,
        settlement.value,
        message.fee_token,
    )
    result = client.ccip_send(router, chain_selector, message, value=settlement.value)
    if not result.success:
        raise TransactionError(
            "ccipSend transaction reverted",
            action="ccip_send",
            tx_hash=result.tx_hash,
            details={"receipt": result.receipt},
        )
    return result


def recover_message_id(client: ChainClient, result: TransactionResult) -> str | None:
    """Best-effort lookup of the CCIP message id; the send already succeeded."""
    try:
        return client.message_id(result)
    except TranseptorError as exc:
        logger.warning("Unable to recover CCIP message id for %s: %s", result.tx_hash, exc)
        return None


def send_ccip_message(
    client: ChainClient,
    network: NetworkConfig,
    router: str,
    chain_selector: int,
    message: CrossChainMessage,
) -> SendResult:
    """QUOTE -> SETTLE -> SUBMIT -> CONFIRM for an already built message."""
    logger.debug("Stage CCIP [%s]: quote fee via router %s", chain_selector, router)
    quote = quote_fee(client, router, chain_selector, message)

    logger.debug("Stage CCIP [%s]: settle %s %s", chain_selector, quote.amount, quote.unit)
    settlement = settle_fee(client, network, router, quote)

    transaction = submit_message(client, router, chain_selector, message, settlement)
    message_id = recover_message_id(client, transaction)
    logger.debug(
        "Stage CCIP [%s]: send complete (tx=%s, message_id=%s)",
        chain_selector,
        transaction.tx_hash,
        message_id,
    )
    return SendResult(
        quote=quote,
        settlement=settlement,
        transaction=transaction,
        message=message,
        message_id=message_id,
    )
