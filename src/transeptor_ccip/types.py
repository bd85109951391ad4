"""Type definitions and data models for the Transeptor CCIP tasks."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from web3 import Web3

from .constants import ZERO_ADDRESS


class PayFeesIn(IntEnum):
    """Currency used to pay CCIP delivery fees (mirrors the on-chain enum)."""

    NATIVE = 0
    LINK = 1

    @property
    def label(self) -> str:
        return "Native" if self is PayFeesIn.NATIVE else "LINK"

    @property
    def unit(self) -> str:
        return "wei" if self is PayFeesIn.NATIVE else "juels"


Address = str  # Ethereum address
Wei = int  # Smallest denomination of any token


@dataclass(frozen=True)
class TokenAmount:
    """Serializable representation of Client.EVMTokenAmount."""

    token: Address
    amount: int

    def as_tuple(self) -> tuple[str, int]:
        return (Web3.to_checksum_address(self.token), int(self.amount))


@dataclass(frozen=True)
class CrossChainMessage:
    """Serializable representation of Client.EVM2AnyMessage."""

    receiver: bytes
    payload: bytes
    extra_args: bytes
    fee_token: Address = ZERO_ADDRESS
    token_amounts: tuple[TokenAmount, ...] = ()

    @property
    def pays_in_native(self) -> bool:
        return int(self.fee_token, 16) == 0

    def as_tuple(self) -> tuple[bytes, bytes, list[tuple[str, int]], str, bytes]:
        """Return the message as tuple consumable by web3."""

        return (
            self.receiver,
            self.payload,
            [token_amount.as_tuple() for token_amount in self.token_amounts],
            Web3.to_checksum_address(self.fee_token),
            self.extra_args,
        )

    def describe(self) -> dict[str, Any]:
        return {
            "receiver": _hex(self.receiver),
            "data": _hex(self.payload),
            "tokenAmounts": [
                {"token": item.token, "amount": item.amount} for item in self.token_amounts
            ],
            "feeToken": self.fee_token,
            "extraArgs": _hex(self.extra_args),
        }


@dataclass(frozen=True)
class FeeQuote:
    """Fee returned by the router for one (destination, message) pair."""

    amount: Wei
    pay_fees_in: PayFeesIn
    fee_token: Address = ZERO_ADDRESS

    @property
    def unit(self) -> str:
        return self.pay_fees_in.unit


@dataclass
class TransactionResult:
    """Mined transaction details."""

    tx_hash: str
    action: str
    status: int = 1
    block_number: int | None = None
    receipt: dict[str, Any] | None = None
    contract_address: Address | None = None

    @property
    def success(self) -> bool:
        return self.status == 1


@dataclass
class FeeSettlement:
    """Outcome of making the quoted fee available to the router."""

    quote: FeeQuote
    value: Wei = 0
    approval: TransactionResult | None = None


@dataclass
class SendResult:
    """Result of a complete CCIP send."""

    quote: FeeQuote
    settlement: FeeSettlement
    transaction: TransactionResult
    message: CrossChainMessage | None = None
    message_id: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def tx_hash(self) -> str:
        return self.transaction.tx_hash


@dataclass(frozen=True)
class ReceivedMessage:
    """Details of the last CCIP message a smart account received."""

    message_id: str
    source_chain_selector: int
    sender: Address
    data: str
    token: Address
    amount: int

    @classmethod
    def from_tuple(cls, raw: Any) -> "ReceivedMessage":
        message_id, selector, sender, data, token, amount = raw
        return cls(
            message_id=_hex(message_id),
            source_chain_selector=int(selector),
            sender=str(sender),
            data=_hex(data),
            token=str(token),
            amount=int(amount),
        )


def _hex(value: bytes | str) -> str:
    if isinstance(value, str):
        return value if value.startswith("0x") else f"0x{value}"
    return Web3.to_hex(value)
