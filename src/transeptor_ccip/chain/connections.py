"""Connection helpers for the Web3 chain client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, cast

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.contract import Contract
from web3.middleware import SignAndSendRawMiddlewareBuilder

from ..config import ClientConfig, NetworkConfig
from ..exceptions import ConfigurationError, NetworkError

logger = logging.getLogger(__name__)


class Web3Connections:
    """Manage the Web3 provider, account middleware, and contract handles."""

    def __init__(
        self,
        network: NetworkConfig,
        client_config: ClientConfig,
        private_key: str | None = None,
    ):
        self.network = network
        self.config = client_config
        self._private_key = private_key
        self._provider: HTTPProvider | None = None
        self._web3: Web3 | None = None
        self._account: LocalAccount | None = None
        self._chain_id: int | None = None
        self._connected = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Initialise the provider and, when a key is present, signing middleware."""

        rpc_url = self.network.require_rpc_url()
        provider, web3 = self._build_web3_provider(rpc_url)

        try:
            chain_id = web3.eth.chain_id
        except Exception as exc:  # RPC failures
            raise NetworkError(
                f"Failed to read chain id from {self.network.name} RPC",
                endpoint=rpc_url,
                details={"error": str(exc)},
            ) from exc
        expected = self.network.chain_id
        if self.config.check_chain_id and expected is not None and chain_id != expected:
            raise ConfigurationError(
                f"Wrong chain! {self.network.name} expects chain id {expected}, "
                f"RPC reports {chain_id}",
                field="rpc_url",
                value=rpc_url,
            )

        if self._private_key is not None:
            try:
                signer = cast(LocalAccount, Account.from_key(self._private_key))
            except Exception as exc:  # eth_account raises several types for bad keys
                raise ConfigurationError(
                    "Failed to derive signer account from provided private key",
                    field="private_key",
                    details={"error": str(exc)},
                ) from exc
            self._apply_account_middleware(web3, signer)
            self._account = signer

        self._provider = provider
        self._web3 = web3
        self._chain_id = chain_id
        self._connected = True
        logger.info("Connected to %s RPC at %s (chain id %s)", self.network.name, rpc_url, chain_id)

    def disconnect(self) -> None:
        self._provider = None
        self._web3 = None
        self._account = None
        self._chain_id = None
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected and self._web3 is not None

    def ensure_connected(self) -> None:
        if not self.is_connected():
            raise NetworkError(
                f"{self.network.name} connector is not connected", endpoint=self.network.rpc_url
            )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            raise NetworkError(
                f"{self.network.name} RPC provider not connected", endpoint=self.network.rpc_url
            )
        return self._web3

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise ConfigurationError(
                "Signer account is not initialised; a private key is required for this task",
                field="private_key",
            )
        return self._account

    @property
    def chain_id(self) -> int | None:
        return self._chain_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def contract(self, address: str, abi: Sequence[Any]) -> Contract:
        return self.web3.eth.contract(address=Web3.to_checksum_address(address), abi=list(abi))

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _build_web3_provider(self, rpc_url: str) -> tuple[HTTPProvider, Web3]:
        provider = HTTPProvider(rpc_url, request_kwargs={"timeout": self.config.request_timeout})
        web3 = Web3(provider)
        if not web3.is_connected():
            raise NetworkError(f"Unable to connect to {self.network.name} RPC", endpoint=rpc_url)
        return provider, web3

    def _apply_account_middleware(self, web3: Web3, account: LocalAccount) -> None:
        middleware = SignAndSendRawMiddlewareBuilder.build(account)
        web3.middleware_onion.add(middleware)  # type: ignore[arg-type]
        web3.eth.default_account = account.address
