"""Shared task plumbing: network selection and client creation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..chain.base import ChainClient
from ..chain.client import connect_web3_client
from ..config import ClientConfig, ConfigProvider, NetworkConfig
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[NetworkConfig, ClientConfig, "str | None"], ChainClient]


@dataclass
class TaskEnvironment:
    """What every task needs: configuration, the selected network and a client factory.

    ``network`` plays the role of the network a task is run against; the CCIP
    tasks only run on the configured source chain.
    """

    config: ConfigProvider
    network: str
    client_factory: ClientFactory = connect_web3_client

    @property
    def current(self) -> NetworkConfig:
        return self.config.network(self.network)

    def require_source_network(self) -> NetworkConfig:
        source = self.config.source_chain
        if self.network != source:
            raise ConfigurationError(
                f"This task can only be executed on the {source} network",
                field="network",
                value=self.network,
            )
        return self.config.network(source)

    def reject_source_network(self) -> NetworkConfig:
        source = self.config.source_chain
        if self.network == source:
            raise ConfigurationError(
                f"This task cannot be executed on the {source} network",
                field="network",
                value=self.network,
            )
        return self.current

    def destination(self, name: str) -> NetworkConfig:
        if name == self.config.source_chain:
            raise ConfigurationError(
                "The destination blockchain cannot be the same as the source blockchain",
                field="destination_blockchain",
                value=name,
            )
        return self.config.network(name)

    def signer_client(self, network: NetworkConfig) -> ChainClient:
        private_key = self.config.private_key()
        logger.debug("Creating signing client for %s", network.name)
        return self.client_factory(network, self.config.client, private_key)

    def reader_client(self, network: NetworkConfig) -> ChainClient:
        logger.debug("Creating read-only client for %s", network.name)
        return self.client_factory(network, self.config.client, None)
