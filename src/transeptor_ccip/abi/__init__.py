"""Contract ABIs shipped with the package."""

import json
from importlib import resources
from typing import Any


def load_contract_abi(filename: str) -> list[dict[str, Any]]:
    """Load an ABI JSON file from the abi package."""
    with resources.files(__package__).joinpath(filename).open("r", encoding="utf-8") as fh:
        return json.load(fh)


IRouterClient_abi = load_contract_abi("IRouterClient.json")
IERC20_abi = load_contract_abi("IERC20.json")
Ownable_abi = load_contract_abi("Ownable.json")
TranseptorAccount_abi = load_contract_abi("TranseptorAccount.json")

__all__ = [
    "IERC20_abi",
    "IRouterClient_abi",
    "Ownable_abi",
    "TranseptorAccount_abi",
    "load_contract_abi",
]
