"""web3.py implementation of :class:`ChainClient`."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from eth_abi import decode as abi_decode
from web3 import Web3

from ..abi import IERC20_abi, IRouterClient_abi, Ownable_abi, TranseptorAccount_abi
from ..config import ClientConfig, NetworkConfig
from ..exceptions import NetworkError, TransactionError
from ..types import CrossChainMessage, PayFeesIn, ReceivedMessage, TransactionResult
from .base import ChainClient
from .connections import Web3Connections
from .transactions import TransactionDispatcher

logger = logging.getLogger(__name__)


class Web3ChainClient(ChainClient):
    """Talk to one network over JSON-RPC, signing with a local key when given."""

    def __init__(
        self,
        network: NetworkConfig,
        client_config: ClientConfig | None = None,
        private_key: str | None = None,
    ) -> None:
        self._network = network
        self._client_config = client_config or ClientConfig()
        self._connections = Web3Connections(network, self._client_config, private_key)
        self._dispatcher = TransactionDispatcher(
            self._connections, receipt_timeout=self._client_config.receipt_timeout
        )

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------
    def connect(self) -> Web3ChainClient:
        try:
            self._connections.connect()
        except Exception:
            self.disconnect()
            raise
        return self

    def disconnect(self) -> None:
        self._connections.disconnect()

    def is_connected(self) -> bool:
        return self._connections.is_connected()

    @property
    def network(self) -> NetworkConfig:
        return self._network

    @property
    def address(self) -> str:
        return self._connections.account.address

    @property
    def web3(self) -> Web3:
        return self._connections.web3

    # ------------------------------------------------------------------
    # Balances and ERC-20
    # ------------------------------------------------------------------
    def native_balance(self, owner: str) -> int:
        try:
            return int(self.web3.eth.get_balance(Web3.to_checksum_address(owner)))
        except Exception as exc:  # RPC failures
            raise NetworkError(
                f"Failed to read native balance of {owner}",
                endpoint=self._network.rpc_url,
                details={"error": str(exc)},
            ) from exc

    def token_balance(self, token: str, owner: str) -> int:
        contract = self._connections.contract(token, IERC20_abi)
        return int(
            self._call(
                contract.functions.balanceOf(Web3.to_checksum_address(owner)), "balanceOf"
            )
        )

    def approve(self, token: str, spender: str, amount: int) -> TransactionResult:
        contract = self._connections.contract(token, IERC20_abi)
        return self._dispatcher.send(
            contract.functions.approve(Web3.to_checksum_address(spender), amount),
            action="approve",
            context={"token": token, "spender": spender, "amount": amount},
        )

    # ------------------------------------------------------------------
    # CCIP router
    # ------------------------------------------------------------------
    def get_fee(self, router: str, chain_selector: int, message: CrossChainMessage) -> int:
        contract = self._connections.contract(router, IRouterClient_abi)
        return int(
            self._call(contract.functions.getFee(chain_selector, message.as_tuple()), "getFee")
        )

    def ccip_send(
        self, router: str, chain_selector: int, message: CrossChainMessage, *, value: int = 0
    ) -> TransactionResult:
        contract = self._connections.contract(router, IRouterClient_abi)
        return self._dispatcher.send(
            contract.functions.ccipSend(chain_selector, message.as_tuple()),
            action="ccip_send",
            value=value,
            context={"router": router, "chain_selector": chain_selector, **message.describe()},
        )

    def message_id(self, result: TransactionResult) -> str | None:
        """Replay the mined call one block earlier and decode its bytes32 return value."""
        if result.block_number is None:
            return None

        web3 = self.web3
        try:
            tx = web3.eth.get_transaction(result.tx_hash)  # type: ignore[arg-type]
            call = {
                "from": tx["from"],
                "to": tx["to"],
                "data": tx["input"],
                "value": tx.get("value", 0),
                "gas": tx["gas"],
            }
            block = result.block_number - 1
            raw = web3.eth.call(call, block_identifier=block)  # type: ignore[arg-type]
            (message_id,) = abi_decode(["bytes32"], raw)
        except Exception as exc:  # RPC failures and undecodable return data
            raise NetworkError(
                "Failed to recover CCIP message id",
                endpoint=self._network.rpc_url,
                details={"tx_hash": result.tx_hash, "error": str(exc)},
            ) from exc

        return Web3.to_hex(message_id)

    # ------------------------------------------------------------------
    # Ownable
    # ------------------------------------------------------------------
    def owner_of(self, contract: str) -> str:
        handle = self._connections.contract(contract, Ownable_abi)
        return str(self._call(handle.functions.owner(), "owner"))

    def transfer_ownership(self, contract: str, new_owner: str) -> TransactionResult:
        handle = self._connections.contract(contract, Ownable_abi)
        return self._dispatcher.send(
            handle.functions.transferOwnership(Web3.to_checksum_address(new_owner)),
            action="transfer_ownership",
            context={"contract": contract, "new_owner": new_owner},
        )

    # ------------------------------------------------------------------
    # Transeptor smart account
    # ------------------------------------------------------------------
    def account_supported_tokens(self, account: str, chain_selector: int) -> list[str]:
        handle = self._connections.contract(account, TranseptorAccount_abi)
        tokens = self._call(
            handle.functions.getSupportedTokens(chain_selector), "getSupportedTokens"
        )
        return [str(token) for token in tokens]

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
        handle = self._connections.contract(account, TranseptorAccount_abi)
        call = handle.functions.getCcipTokenTransferFee(
            chain_selector,
            Web3.to_checksum_address(receiver),
            Web3.to_checksum_address(token),
            amount,
            is_receiver_eoa,
            int(pay_fees_in),
        )
        return int(self._call(call, "getCcipTokenTransferFee"))

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
        handle = self._connections.contract(account, TranseptorAccount_abi)
        return self._dispatcher.send(
            handle.functions.ccipSendToken(
                chain_selector,
                Web3.to_checksum_address(receiver),
                Web3.to_checksum_address(token),
                amount,
                is_receiver_eoa,
                int(pay_fees_in),
            ),
            action="ccip_send_token",
            context={
                "account": account,
                "chain_selector": chain_selector,
                "receiver": receiver,
                "token": token,
                "amount": amount,
            },
        )

    def last_received_message(self, account: str) -> ReceivedMessage:
        handle = self._connections.contract(account, TranseptorAccount_abi)
        raw = self._call(
            handle.functions.getLastReceivedMessageDetails(), "getLastReceivedMessageDetails"
        )
        return ReceivedMessage.from_tuple(raw)

    # ------------------------------------------------------------------
    # Deployment
    # ------------------------------------------------------------------
    def deploy(
        self, name: str, abi: Sequence[Any], bytecode: str, args: Sequence[Any]
    ) -> TransactionResult:
        try:
            factory = self.web3.eth.contract(abi=list(abi), bytecode=bytecode)
            constructor = factory.constructor(*args)
        except Exception as exc:  # malformed abi/bytecode or constructor arguments
            raise TransactionError(
                f"Failed to build {name} deployment",
                action=f"deploy_{name}",
                details={"args": list(args), "error": str(exc)},
            ) from exc
        return self._dispatcher.send(
            constructor,
            action=f"deploy_{name}",
            context={"contract": name, "args": list(args)},
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _call(self, contract_function: Any, name: str) -> Any:
        self._connections.ensure_connected()
        try:
            return contract_function.call()
        except Exception as exc:  # reverts and RPC failures
            raise NetworkError(
                f"Failed to call {name}",
                endpoint=self._network.rpc_url,
                details={"error": str(exc)},
            ) from exc


def connect_web3_client(
    network: NetworkConfig, client_config: ClientConfig, private_key: str | None
) -> Web3ChainClient:
    """Default client factory used by the tasks."""
    return Web3ChainClient(network, client_config, private_key).connect()
