"""Chain client interface used by the CCIP pipeline and the tasks."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..config import NetworkConfig
from ..types import CrossChainMessage, PayFeesIn, ReceivedMessage, TransactionResult


class ChainClient(ABC):
    """Contract reads and writes against one EVM network."""

    @property
    @abstractmethod
    def network(self) -> NetworkConfig:
        pass

    @property
    @abstractmethod
    def address(self) -> str:
        """Signer address."""

    # Balances and ERC-20
    @abstractmethod
    def native_balance(self, owner: str) -> int:
        pass

    @abstractmethod
    def token_balance(self, token: str, owner: str) -> int:
        pass

    @abstractmethod
    def approve(self, token: str, spender: str, amount: int) -> TransactionResult:
        pass

    # CCIP router
    @abstractmethod
    def get_fee(self, router: str, chain_selector: int, message: CrossChainMessage) -> int:
        pass

    @abstractmethod
    def ccip_send(
        self, router: str, chain_selector: int, message: CrossChainMessage, *, value: int = 0
    ) -> TransactionResult:
        pass

    @abstractmethod
    def message_id(self, result: TransactionResult) -> str | None:
        """Recover the CCIP message id of a mined ``ccipSend`` style transaction."""

    # Ownable
    @abstractmethod
    def owner_of(self, contract: str) -> str:
        pass

    @abstractmethod
    def transfer_ownership(self, contract: str, new_owner: str) -> TransactionResult:
        pass

    # Transeptor smart account
    @abstractmethod
    def account_supported_tokens(self, account: str, chain_selector: int) -> list[str]:
        pass

    @abstractmethod
    def account_token_transfer_fee(
        self,
        account: str,
        chain_selector: int,
        receiver: str,
        token: str,
        amount: int,
        is_receiver_eoa: bool,
        pay_fees_in: PayFeesIn,
    ) -> int:
        pass

    @abstractmethod
    def account_send_token(
        self,
        account: str,
        chain_selector: int,
        receiver: str,
        token: str,
        amount: int,
        is_receiver_eoa: bool,
        pay_fees_in: PayFeesIn,
    ) -> TransactionResult:
        pass

    @abstractmethod
    def last_received_message(self, account: str) -> ReceivedMessage:
        pass

    # Deployment
    @abstractmethod
    def deploy(
        self, name: str, abi: Sequence[Any], bytecode: str, args: Sequence[Any]
    ) -> TransactionResult:
        pass
