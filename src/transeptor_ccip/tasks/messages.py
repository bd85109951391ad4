"""Read-only task for inspecting messages delivered to a smart account."""

from __future__ import annotations

from ..console import info, spinner
from ..types import ReceivedMessage
from ..utils import to_checksum
from .base import TaskEnvironment


def get_message(
    env: TaskEnvironment, *, receiver_address: str, blockchain: str
) -> ReceivedMessage:
    """Return the last message the TranseptorAccount ``receiver_address`` received."""
    env.require_source_network()
    account = to_checksum(receiver_address, field="receiver_address")
    network = env.config.network(blockchain)

    client = env.reader_client(network)
    info(
        "Attempting to get the latest received message details from the TranseptorAccount "
        f"smart contract ({account}) on the {network.name} blockchain"
    )
    with spinner("Reading..."):
        details = client.last_received_message(account)

    info("Latest Message Details:")
    info(f"- Message Id: {details.message_id}")
    info(f"- Source Chain Selector: {details.source_chain_selector}")
    info(f"- Sender: {details.sender}")
    info(f"- Encoded Data: {details.data}")
    info(f"- Token: {details.token}")
    info(f"- Amount: {details.amount}")
    return details
