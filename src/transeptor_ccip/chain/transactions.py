"""Transaction dispatch helpers for the Web3 chain client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..exceptions import TransactionError
from ..types import TransactionResult
from ..utils import serialise_receipt
from .connections import Web3Connections

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from web3.contract.contract import ContractConstructor, ContractFunction

logger = logging.getLogger(__name__)


class TransactionDispatcher:
    """Encapsulate contract transaction submission and receipt handling."""

    def __init__(self, connections: Web3Connections, *, receipt_timeout: float) -> None:
        self._connections = connections
        self._receipt_timeout = receipt_timeout

    def send(
        self,
        contract_function: ContractFunction | ContractConstructor,
        *,
        action: str,
        value: int = 0,
        context: Mapping[str, Any] | None = None,
    ) -> TransactionResult:
        """Transact, block until mined, and raise if the receipt reports a revert."""
        self._connections.ensure_connected()

        web3 = self._connections.web3
        sender = self._connections.account.address
        tx_params: dict[str, Any] = {"from": sender}
        if value:
            tx_params["value"] = value

        logger.info("Dispatching %s from %s (value=%s)", action, sender, value)
        try:
            tx_hash = contract_function.transact(tx_params)  # type: ignore[arg-type]
        except Exception as exc:  # web3 surfaces reverts and RPC failures with many types
            raise TransactionError(
                f"Failed to submit transaction for {action}",
                action=action,
                details={"context": dict(context or {}), "error": str(exc)},
            ) from exc

        tx_hex = tx_hash.to_0x_hex()
        logger.info("Transaction sent for action=%s hash=%s", action, tx_hex)

        try:
            receipt = web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self._receipt_timeout
            )
        except Exception as exc:  # web3.exceptions.TimeExhausted and RPC errors
            raise TransactionError(
                f"Failed waiting for {action} receipt",
                action=action,
                tx_hash=tx_hex,
                details={"error": str(exc)},
            ) from exc

        status = int(receipt.get("status", 0))
        block_number = receipt.get("blockNumber")
        contract_address = receipt.get("contractAddress")
        logger.info(
            "Transaction mined for action=%s hash=%s block=%s status=%s",
            action,
            tx_hex,
            block_number,
            status,
        )

        result = TransactionResult(
            tx_hash=tx_hex,
            action=action,
            status=status,
            block_number=block_number,
            receipt=serialise_receipt(receipt),
            contract_address=str(contract_address) if contract_address else None,
        )
        if not result.success:
            raise TransactionError(
                f"Transaction for {action} reverted",
                action=action,
                tx_hash=tx_hex,
                details={"context": dict(context or {}), "block_number": block_number},
            )
        return result
