"""
Transeptor CCIP command-line entry point.

Usage:
    transeptor-ccip [OPTIONS] COMMAND [ARGS]...
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from . import __version__
from .chain.client import connect_web3_client
from .config import load_config
from .console import failure, success
from .constants import DEFAULT_GAS_LIMIT
from .exceptions import TranseptorError
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

logger = logging.getLogger("transeptor_ccip.cli")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.version_option(__version__, message="%(prog)s %(version)s")
@click.option(
    "--network",
    envvar="TRANSEPTOR_NETWORK",
    default=None,
    help="Network the task runs against (defaults to the source chain)",
)
@click.option(
    "--config",
    "config_path",
    envvar="TRANSEPTOR_CONFIG",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with network overrides and deployed addresses",
)
@click.option(
    "--log-level",
    envvar="LOGLEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Python logging level",
)
@click.pass_context
def cli(ctx: click.Context, network: str | None, config_path: Path | None, log_level: str):
    """Chainlink CCIP tasks for Transeptor smart accounts."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    try:
        config = ctx.obj.get("config") or load_config(config_path)
    except TranseptorError as exc:
        failure(str(exc))
        ctx.exit(1)

    ctx.obj["env"] = TaskEnvironment(
        config=config,
        network=network or config.source_chain,
        client_factory=ctx.obj.get("client_factory", connect_web3_client),
    )


def _run(ctx: click.Context, task: Callable[..., Any], **kwargs: Any) -> Any:
    """Invoke ``task`` and turn any fatal task error into exit status 1."""
    env: TaskEnvironment = ctx.obj["env"]
    try:
        return task(env, **kwargs)
    except TranseptorError as exc:
        logger.debug("Task %s failed: %s", task.__name__, exc.details)
        failure(str(exc))
        ctx.exit(1)


@cli.command("deploy-account-factory")
@click.option("--router", default=None, help="The address of the Router contract")
@click.option("--entrypoint", default=None, help="The address of the erc4337 entrypoint contract")
@click.pass_context
def deploy_account_factory_command(
    ctx: click.Context, router: str | None, entrypoint: str | None
):
    """Deploy the TranseptorAccountFactory smart contract."""
    _run(ctx, deploy_account_factory, router=router, entrypoint=entrypoint)


@cli.command("deploy-basic-counter")
@click.option("--owner", required=True, help="The owner of the BasicCounter contract")
@click.pass_context
def deploy_basic_counter_command(ctx: click.Context, owner: str):
    """Deploy the BasicCounter smart contract."""
    _run(ctx, deploy_basic_counter, owner=owner)


@cli.command("deploy-destination-account-factory-receiver")
@click.option("--router", default=None, help="The address of the Router contract")
@click.option(
    "--smart-account-factory",
    default=None,
    help="The address of the TranseptorAccountFactory contract",
)
@click.pass_context
def deploy_destination_receiver_command(
    ctx: click.Context, router: str | None, smart_account_factory: str | None
):
    """Deploy the DestinationAccountFactoryReceiver smart contract."""
    _run(
        ctx,
        deploy_destination_account_factory_receiver,
        router=router,
        smart_account_factory=smart_account_factory,
    )


@cli.command("ccip-smart-account-deploy")
@click.option(
    "--destination-blockchain",
    required=True,
    help="The name of the destination blockchain (for example polygonMumbai)",
)
@click.option("--owner", required=True, help="EOA owner of the smart account on the destination")
@click.option("--salt", required=True, help="uint256 salt for the smart account")
@click.option("--pay-fees-in", required=True, help="Choose between 'Native' and 'LINK'")
@click.option("--gas-limit", type=int, default=DEFAULT_GAS_LIMIT, show_default=True)
@click.option("--router", default=None, help="The address of the Router contract")
@click.pass_context
def ccip_smart_account_deploy_command(
    ctx: click.Context,
    destination_blockchain: str,
    owner: str,
    salt: str,
    pay_fees_in: str,
    gas_limit: int,
    router: str | None,
):
    """Send a CCIP message that creates a smart account on the destination chain."""
    _run(
        ctx,
        ccip_smart_account_deploy,
        destination_blockchain=destination_blockchain,
        owner=owner,
        salt=salt,
        pay_fees_in=pay_fees_in,
        gas_limit=gas_limit,
        router=router,
    )
    success("Task ccip-smart-account-deploy finished with the execution")


@cli.command("ccip-smart-account-execute")
@click.option(
    "--destination-blockchain",
    required=True,
    help="The name of the destination blockchain (for example polygonMumbai)",
)
@click.option(
    "--receiver",
    required=True,
    help="The address of the receiver TranseptorAccount on the destination blockchain",
)
@click.option(
    "--dest",
    required=True,
    help="Destination contract address on destination chain that will be called",
)
@click.option("--pay-fees-in", required=True, help="Choose between 'Native' and 'LINK'")
@click.option("--gas-limit", type=int, default=DEFAULT_GAS_LIMIT, show_default=True)
@click.option("--router", default=None, help="The address of the Router contract")
@click.option(
    "--call-data",
    default=None,
    help="Hex call data to relay to --dest (defaults to BasicCounter.increment())",
)
@click.pass_context
def ccip_smart_account_execute_command(
    ctx: click.Context,
    destination_blockchain: str,
    receiver: str,
    dest: str,
    pay_fees_in: str,
    gas_limit: int,
    router: str | None,
    call_data: str | None,
):
    """Send a CCIP message that makes a destination smart account call a contract."""
    _run(
        ctx,
        ccip_smart_account_execute,
        destination_blockchain=destination_blockchain,
        receiver=receiver,
        dest=dest,
        pay_fees_in=pay_fees_in,
        gas_limit=gas_limit,
        router=router,
        call_data=call_data,
    )
    success("Task ccip-smart-account-execute finished with the execution")


@cli.command("ccip-smart-account-token-transfer")
@click.option(
    "--destination-blockchain",
    required=True,
    help="The name of the destination blockchain (for example polygonMumbai)",
)
@click.option(
    "--receiver",
    required=True,
    help="The address of the receiver account on the destination blockchain",
)
@click.option(
    "--token-address",
    required=True,
    help="The address of a token to be sent on the source blockchain",
)
@click.option(
    "--sender",
    required=True,
    help="The address of the Transeptor smart account on the source blockchain",
)
@click.option("--amount", required=True, help="The amount of token to be sent")
@click.option(
    "--is-receiver-eoa", required=True, help="If the receiver is an EOA or a smart account"
)
@click.option("--pay-fees-in", required=True, help="Choose between 'Native' and 'LINK'")
@click.pass_context
def ccip_smart_account_token_transfer_command(
    ctx: click.Context,
    destination_blockchain: str,
    receiver: str,
    token_address: str,
    sender: str,
    amount: str,
    is_receiver_eoa: str,
    pay_fees_in: str,
):
    """Transfer tokens cross-chain from a Transeptor smart account."""
    _run(
        ctx,
        ccip_smart_account_token_transfer,
        destination_blockchain=destination_blockchain,
        receiver=receiver,
        token_address=token_address,
        sender=sender,
        amount=amount,
        is_receiver_eoa=is_receiver_eoa,
        pay_fees_in=pay_fees_in,
    )


@cli.command("get-message")
@click.option("--receiver-address", required=True, help="The TranseptorAccount address")
@click.option(
    "--blockchain",
    required=True,
    help="The name of the blockchain (for example ethereumSepolia)",
)
@click.pass_context
def get_message_command(ctx: click.Context, receiver_address: str, blockchain: str):
    """Get the TranseptorAccount latest received message details."""
    _run(ctx, get_message, receiver_address=receiver_address, blockchain=blockchain)


def main() -> None:  # pragma: no cover - console script
    cli(obj={})


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
