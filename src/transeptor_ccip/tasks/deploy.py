"""Contract deployment tasks."""

from __future__ import annotations

from dataclasses import dataclass

from ..artifacts import load_artifact
from ..console import info, spinner, success
from ..exceptions import TransactionError
from ..types import TransactionResult
from ..utils import to_checksum
from .base import TaskEnvironment

ACCOUNT_FACTORY = "TranseptorAccountFactory"
BASIC_COUNTER = "BasicCounter"
ACCOUNT_FACTORY_RECEIVER = "DestinationAccountFactoryReceiver"


@dataclass
class CounterDeployment:
    deployment: TransactionResult
    ownership: TransactionResult

    @property
    def address(self) -> str | None:
        return self.deployment.contract_address


def deploy_account_factory(
    env: TaskEnvironment, *, router: str | None = None, entrypoint: str | None = None
) -> TransactionResult:
    """Deploy ``TranseptorAccountFactory(entryPoint, router)`` on the selected network."""
    network = env.current
    router_address = to_checksum(router, field="router") if router else network.router
    entrypoint_address = (
        to_checksum(entrypoint, field="entrypoint")
        if entrypoint
        else network.require_entry_point()
    )
    artifact = load_artifact(env.config.artifacts_dir, ACCOUNT_FACTORY)

    client = env.signer_client(network)
    info(
        f"Attempting to deploy {ACCOUNT_FACTORY} on the {network.name} blockchain using "
        f"{client.address} address, with the Router address {router_address} provided as "
        "constructor argument"
    )
    with spinner("Deploying..."):
        result = client.deploy(
            ACCOUNT_FACTORY, artifact.abi, artifact.bytecode, [entrypoint_address, router_address]
        )

    success(
        f"Transeptor Account Factory deployed at address {result.contract_address} "
        f"on {network.name} blockchain"
    )
    return result


def deploy_basic_counter(env: TaskEnvironment, *, owner: str) -> CounterDeployment:
    """Deploy ``BasicCounter`` and hand its ownership to ``owner``."""
    network = env.current
    new_owner = to_checksum(owner, field="owner")
    artifact = load_artifact(env.config.artifacts_dir, BASIC_COUNTER)

    client = env.signer_client(network)
    info(
        f"Attempting to deploy {BASIC_COUNTER} on the {network.name} blockchain using "
        f"{client.address} address"
    )
    with spinner("Deploying..."):
        deployment = client.deploy(BASIC_COUNTER, artifact.abi, artifact.bytecode, [])
    success(
        f"Basic Counter deployed at address {deployment.contract_address} "
        f"on the {network.name} blockchain"
    )

    counter = deployment.contract_address
    if counter is None:
        raise TransactionError(
            f"{BASIC_COUNTER} deployment receipt has no contract address",
            action=deployment.action,
            tx_hash=deployment.tx_hash,
        )

    info(f"Attempting to grant the increment role to the {new_owner} address")
    with spinner("Transferring ownership..."):
        ownership = client.transfer_ownership(counter, new_owner)
    success(
        f"(owner){new_owner} can now increment BasicCounter. "
        f"Transaction hash: {ownership.tx_hash}"
    )
    return CounterDeployment(deployment=deployment, ownership=ownership)


def deploy_destination_account_factory_receiver(
    env: TaskEnvironment,
    *,
    router: str | None = None,
    smart_account_factory: str | None = None,
) -> TransactionResult:
    """Deploy ``DestinationAccountFactoryReceiver(router, factory)`` off the source chain."""
    network = env.reject_source_network()
    router_address = to_checksum(router, field="router") if router else network.router
    factory_address = (
        to_checksum(smart_account_factory, field="smart_account_factory")
        if smart_account_factory
        else network.require_account_factory()
    )
    artifact = load_artifact(env.config.artifacts_dir, ACCOUNT_FACTORY_RECEIVER)

    client = env.signer_client(network)
    info(
        f"Attempting to deploy {ACCOUNT_FACTORY_RECEIVER} on the {network.name} blockchain "
        f"using {client.address} address, with the Router address {router_address} and the "
        f"{ACCOUNT_FACTORY} address {factory_address}."
    )
    with spinner("Deploying..."):
        result = client.deploy(
            ACCOUNT_FACTORY_RECEIVER,
            artifact.abi,
            artifact.bytecode,
            [router_address, factory_address],
        )

    success(
        f"{ACCOUNT_FACTORY_RECEIVER} deployed at address {result.contract_address} "
        f"on {network.name} blockchain"
    )
    return result

