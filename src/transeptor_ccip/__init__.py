"""Transeptor CCIP - Chainlink CCIP tasks for Transeptor smart accounts.

This library builds CCIP messages, settles their fees in native currency or
LINK, submits them through the router and exposes each step as a
command-line task.
"""

__version__ = "0.1.0"

from .ccip import (
    build_message,
    decode_extra_args,
    encode_extra_args,
    quote_fee,
    send_ccip_message,
    settle_fee,
    submit_message,
)
from .chain import ChainClient, Web3ChainClient
from .config import ConfigProvider, NetworkConfig, StaticConfigProvider, load_config
from .exceptions import (
    AuthorizationError,
    ConfigurationError,
    InsufficientFundsError,
    NetworkError,
    TransactionError,
    TranseptorError,
    ValidationError,
)
from .tasks import (
    TaskEnvironment,
    ccip_smart_account_deploy,
    ccip_smart_account_execute,
    ccip_smart_account_token_transfer,
    deploy_account_factory,
    deploy_basic_counter,
    deploy_destination_account_factory_receiver,
    get_message,
)
from .types import (
    CrossChainMessage,
    FeeQuote,
    FeeSettlement,
    PayFeesIn,
    ReceivedMessage,
    SendResult,
    TokenAmount,
    TransactionResult,
)

__all__ = [
    # CCIP pipeline
    "build_message",
    "decode_extra_args",
    "encode_extra_args",
    "quote_fee",
    "send_ccip_message",
    "settle_fee",
    "submit_message",
    # Chain clients
    "ChainClient",
    "Web3ChainClient",
    # Configuration
    "ConfigProvider",
    "NetworkConfig",
    "StaticConfigProvider",
    "load_config",
    # Tasks
    "TaskEnvironment",
    "ccip_smart_account_deploy",
    "ccip_smart_account_execute",
    "ccip_smart_account_token_transfer",
    "deploy_account_factory",
    "deploy_basic_counter",
    "deploy_destination_account_factory_receiver",
    "get_message",
    # Types
    "CrossChainMessage",
    "FeeQuote",
    "FeeSettlement",
    "PayFeesIn",
    "ReceivedMessage",
    "SendResult",
    "TokenAmount",
    "TransactionResult",
    # Exceptions
    "TranseptorError",
    "AuthorizationError",
    "ConfigurationError",
    "InsufficientFundsError",
    "NetworkError",
    "TransactionError",
    "ValidationError",
]
