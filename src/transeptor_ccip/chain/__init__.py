"""Chain client interface and its web3.py implementation."""

from .base import ChainClient
from .client import Web3ChainClient, connect_web3_client
from .connections import Web3Connections
from .transactions import TransactionDispatcher

__all__ = [
    "ChainClient",
    "TransactionDispatcher",
    "Web3ChainClient",
    "Web3Connections",
    "connect_web3_client",
]
