"""Configuration containers and providers for the CCIP tasks."""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from web3 import Web3
from web3.types import ChecksumAddress

from .constants import (
    CCIP_NETWORKS,
    DEFAULT_ENTRY_POINT,
    DEFAULT_SOURCE_CHAIN,
    rpc_env_var,
)
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_ARTIFACTS_DIR = "artifacts"


@dataclass(frozen=True)
class NetworkConfig:
    """Per-chain CCIP settings and deployed Transeptor contract addresses."""

    name: str
    chain_selector: int
    router: ChecksumAddress
    link_token: ChecksumAddress
    fee_tokens: tuple[ChecksumAddress, ...] = ()
    chain_id: int | None = None
    rpc_url: str | None = None
    entry_point: ChecksumAddress | None = None
    account_factory: ChecksumAddress | None = None
    account_factory_receiver: ChecksumAddress | None = None

    def require_rpc_url(self) -> str:
        if not self.rpc_url:
            raise ConfigurationError(
                f"RPC URL for {self.name} is not configured (set {rpc_env_var(self.name)})",
                field="rpc_url",
                value=self.name,
            )
        return self.rpc_url

    def require_entry_point(self) -> ChecksumAddress:
        if self.entry_point is None:
            raise ConfigurationError(
                f"EntryPoint address for {self.name} is not configured",
                field="entry_point",
                value=self.name,
            )
        return self.entry_point

    def require_account_factory(self) -> ChecksumAddress:
        if self.account_factory is None:
            raise ConfigurationError(
                f"TranseptorAccountFactory address for {self.name} is not configured",
                field="account_factory",
                value=self.name,
            )
        return self.account_factory

    def require_account_factory_receiver(self) -> ChecksumAddress:
        if self.account_factory_receiver is None:
            raise ConfigurationError(
                f"DestinationAccountFactoryReceiver address for {self.name} is not configured",
                field="account_factory_receiver",
                value=self.name,
            )
        return self.account_factory_receiver

    def supports_fee_token(self, token: str) -> bool:
        return any(candidate.lower() == token.lower() for candidate in self.fee_tokens)


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every chain client."""

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    check_chain_id: bool = True


class ConfigProvider(ABC):
    """Source of network settings, signer key and task defaults."""

    @property
    @abstractmethod
    def source_chain(self) -> str:
        pass

    @property
    @abstractmethod
    def artifacts_dir(self) -> Path:
        pass

    @property
    @abstractmethod
    def client(self) -> ClientConfig:
        pass

    @abstractmethod
    def network(self, name: str) -> NetworkConfig:
        pass

    @abstractmethod
    def private_key(self) -> str:
        pass


@dataclass(frozen=True)
class StaticConfigProvider(ConfigProvider):
    """In-memory provider; also what :func:`load_config` returns."""

    networks: Mapping[str, NetworkConfig]
    signer_key: str | None = None
    source: str = DEFAULT_SOURCE_CHAIN
    artifacts: Path = Path(DEFAULT_ARTIFACTS_DIR)
    client_config: ClientConfig = field(default_factory=ClientConfig)

    @property
    def source_chain(self) -> str:
        return self.source

    @property
    def artifacts_dir(self) -> Path:
        return self.artifacts

    @property
    def client(self) -> ClientConfig:
        return self.client_config

    def network(self, name: str) -> NetworkConfig:
        try:
            return self.networks[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown blockchain {name}. Supported: {', '.join(sorted(self.networks))}",
                field="network",
                value=name,
            ) from None

    def private_key(self) -> str:
        if not self.signer_key:
            raise ConfigurationError(
                "PRIVATE_KEY not found in environment variables", field="private_key"
            )
        return self.signer_key

    def with_network(self, network: NetworkConfig) -> StaticConfigProvider:
        networks = dict(self.networks)
        networks[network.name] = network
        return replace(self, networks=networks)


def _to_checksum(value: Any, *, field_name: str) -> ChecksumAddress:
    try:
        return Web3.to_checksum_address(value)
    except Exception as exc:  # web3 raises ValueError/TypeError for malformed inputs
        raise ConfigurationError(
            f"Invalid address for {field_name}: {value}", field=field_name, value=value
        ) from exc


def _optional_checksum(value: Any, *, field_name: str) -> ChecksumAddress | None:
    if value in (None, ""):
        return None
    return _to_checksum(value, field_name=field_name)


def build_network(
    name: str, data: Mapping[str, Any], env: Mapping[str, str] | None = None
) -> NetworkConfig:
    """Validate one network entry; RPC URL falls back to ``<NETWORK>_RPC_URL``."""

    missing = [key for key in ("router", "chain_selector", "link_token") if key not in data]
    if missing:
        raise ConfigurationError(
            f"network {name} missing required keys: {', '.join(missing)}",
            field="network",
            value=name,
        )

    env = os.environ if env is None else env
    link_token = _to_checksum(data["link_token"], field_name=f"{name}.link_token")
    fee_tokens = tuple(
        _to_checksum(token, field_name=f"{name}.fee_tokens")
        for token in data.get("fee_tokens", [link_token])
    )

    try:
        chain_selector = int(data["chain_selector"])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid chain selector for {name}",
            field=f"{name}.chain_selector",
            value=data["chain_selector"],
        ) from exc

    chain_id = data.get("chain_id")
    return NetworkConfig(
        name=name,
        chain_selector=chain_selector,
        router=_to_checksum(data["router"], field_name=f"{name}.router"),
        link_token=link_token,
        fee_tokens=fee_tokens,
        chain_id=int(chain_id) if chain_id is not None else None,
        rpc_url=env.get(rpc_env_var(name)) or data.get("rpc_url"),
        entry_point=_optional_checksum(
            data.get("entry_point", DEFAULT_ENTRY_POINT), field_name=f"{name}.entry_point"
        ),
        account_factory=_optional_checksum(
            data.get("account_factory"), field_name=f"{name}.account_factory"
        ),
        account_factory_receiver=_optional_checksum(
            data.get("account_factory_receiver"), field_name=f"{name}.account_factory_receiver"
        ),
    )


def _load_json(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {path}", field="config") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Config file contains invalid JSON: {path}", field="config"
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain an object: {path}", field="config")
    return data


def load_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    dotenv: bool = True,
) -> StaticConfigProvider:
    """Merge the built-in CCIP table, an optional JSON file and the environment.

    The JSON file may contain ``networks`` (per-network overrides, merged key by
    key over the built-in table), ``source_chain``, ``artifacts_dir`` and
    ``request_timeout`` / ``receipt_timeout``.
    """

    if dotenv:
        load_dotenv()
    env = os.environ if env is None else env

    data: dict[str, Any] = _load_json(config_path) if config_path is not None else {}

    merged: dict[str, dict[str, Any]] = {
        name: dict(entry) for name, entry in CCIP_NETWORKS.items()
    }
    overrides = data.get("networks", {})
    if not isinstance(overrides, Mapping):
        raise ConfigurationError("networks must be an object", field="networks")
    for name, entry in overrides.items():
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"network {name} must be an object", field="networks")
        merged.setdefault(name, {}).update(entry)

    networks = {name: build_network(name, entry, env) for name, entry in merged.items()}
    logger.debug("Loaded %s networks (config=%s)", len(networks), config_path)

    source = str(data.get("source_chain", DEFAULT_SOURCE_CHAIN))
    if source not in networks:
        raise ConfigurationError(
            f"Source chain {source} is not a configured network", field="source_chain", value=source
        )

    client_config = ClientConfig(
        request_timeout=float(data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)),
        receipt_timeout=float(data.get("receipt_timeout", DEFAULT_RECEIPT_TIMEOUT)),
    )

    return StaticConfigProvider(
        networks=networks,
        signer_key=(env.get("PRIVATE_KEY") or "").strip() or None,
        source=source,
        artifacts=Path(str(data.get("artifacts_dir", DEFAULT_ARTIFACTS_DIR))),
        client_config=client_config,
    )
