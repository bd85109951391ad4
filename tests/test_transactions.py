from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

import pytest
from hexbytes import HexBytes

from transeptor_ccip.chain.connections import Web3Connections
from transeptor_ccip.chain.transactions import TransactionDispatcher
from transeptor_ccip.exceptions import TransactionError

from .conftest import COUNTER, SIGNER

TX_HASH = HexBytes("0x" + "cd" * 32)


class DummyFunction:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.params: list[dict[str, Any]] = []

    def transact(self, params: dict[str, Any]) -> HexBytes:
        self.params.append(params)
        if self.error is not None:
            raise self.error
        return TX_HASH


class DummyConnections:
    def __init__(self, receipt: dict[str, Any] | Exception) -> None:
        self.connected = False
        self.account = SimpleNamespace(address=SIGNER)
        self.web3 = SimpleNamespace(eth=SimpleNamespace(wait_for_transaction_receipt=self._wait))
        self._receipt = receipt
        self.waited: list[tuple[HexBytes, float]] = []

    def ensure_connected(self) -> None:
        self.connected = True

    def _wait(self, tx_hash: HexBytes, timeout: float) -> dict[str, Any]:
        self.waited.append((tx_hash, timeout))
        if isinstance(self._receipt, Exception):
            raise self._receipt
        return self._receipt


def _dispatcher(connections: DummyConnections) -> TransactionDispatcher:
    return TransactionDispatcher(cast(Web3Connections, connections), receipt_timeout=5.0)


def test_send_returns_mined_result() -> None:
    connections = DummyConnections(
        {"status": 1, "blockNumber": 12, "contractAddress": COUNTER, "logs": []}
    )
    function = DummyFunction()

    result = _dispatcher(connections).send(function, action="ccip_send", value=1000)

    assert connections.connected
    assert function.params == [{"from": SIGNER, "value": 1000}]
    assert connections.waited == [(TX_HASH, 5.0)]
    assert result.tx_hash == "0x" + "cd" * 32
    assert result.block_number == 12
    assert result.contract_address == COUNTER
    assert result.receipt == {
        "status": 1,
        "blockNumber": 12,
        "contractAddress": COUNTER,
        "logs": [],
    }


def test_zero_value_is_not_sent() -> None:
    function = DummyFunction()

    _dispatcher(DummyConnections({"status": 1})).send(function, action="approve")

    assert function.params == [{"from": SIGNER}]


def test_reverted_receipt_raises() -> None:
    with pytest.raises(TransactionError) as exc:
        _dispatcher(DummyConnections({"status": 0, "blockNumber": 3})).send(
            DummyFunction(), action="approve"
        )

    assert exc.value.action == "approve"
    assert exc.value.tx_hash == "0x" + "cd" * 32
    assert exc.value.details["block_number"] == 3


def test_submission_failure_is_wrapped() -> None:
    function = DummyFunction(error=ValueError("execution reverted"))

    with pytest.raises(TransactionError) as exc:
        _dispatcher(DummyConnections({"status": 1})).send(
            function, action="ccip_send", context={"selector": 1}
        )

    assert exc.value.tx_hash is None
    assert exc.value.details == {"context": {"selector": 1}, "error": "execution reverted"}


def test_receipt_timeout_is_wrapped() -> None:
    connections = DummyConnections(TimeoutError("not mined"))

    with pytest.raises(TransactionError) as exc:
        _dispatcher(connections).send(DummyFunction(), action="deploy_BasicCounter")

    assert "receipt" in str(exc.value)
    assert exc.value.tx_hash == "0x" + "cd" * 32
