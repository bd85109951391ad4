from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from transeptor_ccip.chain.base import ChainClient
from transeptor_ccip.config import ClientConfig, NetworkConfig, StaticConfigProvider
from transeptor_ccip.exceptions import NetworkError
from transeptor_ccip.tasks import TaskEnvironment
from transeptor_ccip.types import (
    CrossChainMessage,
    PayFeesIn,
    ReceivedMessage,
    TransactionResult,
)

SIGNER = "0x" + "1" * 40
SOURCE_ROUTER = "0x" + "2" * 40
SOURCE_LINK = "0x" + "3" * 40
SOURCE_WRAPPED = "0x" + "4" * 40
DEST_ROUTER = "0x" + "5" * 40
DEST_LINK = "0x" + "6" * 40
FACTORY = "0x" + "7" * 40
FACTORY_RECEIVER = "0x" + "8" * 40
ACCOUNT = "0x" + "9" * 40
COUNTER = "0x" + "12" * 20
TOKEN = "0x" + "13" * 20
RECEIVER = "0x" + "14" * 20

SEPOLIA_SELECTOR = 16015286601757825753
MUMBAI_SELECTOR = 12532609583862916517


class FakeChainClient(ChainClient):
    """In-memory chain client recording every call made through it."""

    def __init__(
        self,
        network: NetworkConfig,
        *,
        fee: int = 1000,
        native_balance: int = 10**18,
        token_balance: int = 10**18,
        owners: dict[str, str] | None = None,
        supported_tokens: Sequence[str] = (),
        message_id: str | None = "0x" + "ab" * 32,
        received: ReceivedMessage | None = None,
    ) -> None:
        self._network = network
        self.fee = fee
        self.native = native_balance
        self.tokens = token_balance
        self.owners = dict(owners or {})
        self.supported_tokens = list(supported_tokens)
        self._message_id = message_id
        self.received = received
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._counter = 0

    # helpers -----------------------------------------------------------
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_named(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for call_name, kwargs in self.calls if call_name == name]

    def _tx(self, action: str, **extra: Any) -> TransactionResult:
        self._counter += 1
        return TransactionResult(
            tx_hash=f"0x{self._counter:064x}",
            action=action,
            status=1,
            block_number=100 + self._counter,
            **extra,
        )

    # ChainClient -------------------------------------------------------
    @property
    def network(self) -> NetworkConfig:
        return self._network

    @property
    def address(self) -> str:
        return SIGNER

    def native_balance(self, owner: str) -> int:
        self.calls.append(("native_balance", {"owner": owner}))
        return self.native

    def token_balance(self, token: str, owner: str) -> int:
        self.calls.append(("token_balance", {"token": token, "owner": owner}))
        return self.tokens

    def approve(self, token: str, spender: str, amount: int) -> TransactionResult:
        self.calls.append(("approve", {"token": token, "spender": spender, "amount": amount}))
        return self._tx("approve")

    def get_fee(self, router: str, chain_selector: int, message: CrossChainMessage) -> int:
        self.calls.append(
            ("get_fee", {"router": router, "chain_selector": chain_selector, "message": message})
        )
        return self.fee

    def ccip_send(
        self, router: str, chain_selector: int, message: CrossChainMessage, *, value: int = 0
    ) -> TransactionResult:
        self.calls.append(
            (
                "ccip_send",
                {
                    "router": router,
                    "chain_selector": chain_selector,
                    "message": message,
                    "value": value,
                },
            )
        )
        return self._tx("ccip_send")

    def message_id(self, result: TransactionResult) -> str | None:
        self.calls.append(("message_id", {"tx_hash": result.tx_hash}))
        if self._message_id is None:
            raise NetworkError("replay failed")
        return self._message_id

    def owner_of(self, contract: str) -> str:
        self.calls.append(("owner_of", {"contract": contract}))
        return self.owners.get(contract, SIGNER)

    def transfer_ownership(self, contract: str, new_owner: str) -> TransactionResult:
        self.calls.append(("transfer_ownership", {"contract": contract, "new_owner": new_owner}))
        return self._tx("transfer_ownership")

    def account_supported_tokens(self, account: str, chain_selector: int) -> list[str]:
        self.calls.append(
            ("account_supported_tokens", {"account": account, "chain_selector": chain_selector})
        )
        return self.supported_tokens

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
        self.calls.append(
            (
                "account_token_transfer_fee",
                {"account": account, "amount": amount, "pay_fees_in": pay_fees_in},
            )
        )
        return self.fee

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
        self.calls.append(
            (
                "account_send_token",
                {
                    "account": account,
                    "chain_selector": chain_selector,
                    "receiver": receiver,
                    "token": token,
                    "amount": amount,
                    "is_receiver_eoa": is_receiver_eoa,
                    "pay_fees_in": pay_fees_in,
                },
            )
        )
        return self._tx("ccip_send_token")

    def last_received_message(self, account: str) -> ReceivedMessage:
        self.calls.append(("last_received_message", {"account": account}))
        assert self.received is not None
        return self.received

    def deploy(
        self, name: str, abi: Sequence[Any], bytecode: str, args: Sequence[Any]
    ) -> TransactionResult:
        self.calls.append(("deploy", {"name": name, "bytecode": bytecode, "args": list(args)}))
        return self._tx(f"deploy_{name}", contract_address=COUNTER)


class RecordingFactory:
    """Client factory handing out one fake per network and remembering every request."""

    def __init__(self, **client_kwargs: Any) -> None:
        self.client_kwargs = client_kwargs
        self.requests: list[tuple[str, str | None]] = []
        self.clients: dict[str, FakeChainClient] = {}

    def __call__(
        self, network: NetworkConfig, client_config: ClientConfig, private_key: str | None
    ) -> FakeChainClient:
        self.requests.append((network.name, private_key))
        if network.name not in self.clients:
            self.clients[network.name] = FakeChainClient(network, **self.client_kwargs)
        return self.clients[network.name]


def make_networks() -> dict[str, NetworkConfig]:
    return {
        "ethereumSepolia": NetworkConfig(
            name="ethereumSepolia",
            chain_selector=SEPOLIA_SELECTOR,
            router=SOURCE_ROUTER,  # type: ignore[arg-type]
            link_token=SOURCE_LINK,  # type: ignore[arg-type]
            fee_tokens=(SOURCE_LINK, SOURCE_WRAPPED),  # type: ignore[arg-type]
            rpc_url="https://sepolia.example",
        ),
        "polygonMumbai": NetworkConfig(
            name="polygonMumbai",
            chain_selector=MUMBAI_SELECTOR,
            router=DEST_ROUTER,  # type: ignore[arg-type]
            link_token=DEST_LINK,  # type: ignore[arg-type]
            fee_tokens=(DEST_LINK,),  # type: ignore[arg-type]
            rpc_url="https://mumbai.example",
            account_factory=FACTORY,  # type: ignore[arg-type]
            account_factory_receiver=FACTORY_RECEIVER,  # type: ignore[arg-type]
        ),
    }


@pytest.fixture
def networks() -> dict[str, NetworkConfig]:
    return make_networks()


@pytest.fixture
def provider(networks: dict[str, NetworkConfig], tmp_path) -> StaticConfigProvider:
    return StaticConfigProvider(
        networks=networks,
        signer_key="0x" + "01" * 32,
        artifacts=tmp_path / "artifacts",
    )


@pytest.fixture
def factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def env(provider: StaticConfigProvider, factory: RecordingFactory) -> TaskEnvironment:
    return TaskEnvironment(config=provider, network="ethereumSepolia", client_factory=factory)
