"""Command-line tasks, one function per task."""

from .base import ClientFactory, TaskEnvironment
from .deploy import (
    CounterDeployment,
    deploy_account_factory,
    deploy_basic_counter,
    deploy_destination_account_factory_receiver,
)
from .messages import get_message
from .smart_account import (
    ccip_smart_account_deploy,
    ccip_smart_account_execute,
    ccip_smart_account_token_transfer,
)

__all__ = [
    "ClientFactory",
    "CounterDeployment",
    "TaskEnvironment",
    "ccip_smart_account_deploy",
    "ccip_smart_account_execute",
    "ccip_smart_account_token_transfer",
    "deploy_account_factory",
    "deploy_basic_counter",
    "deploy_destination_account_factory_receiver",
    "get_message",
]
