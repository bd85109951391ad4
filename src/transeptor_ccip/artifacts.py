"""Loading of compiled Hardhat contract artifacts for deployment tasks."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractArtifact:
    name: str
    abi: list[dict[str, Any]]
    bytecode: str
    path: Path


def find_artifact(artifacts_dir: Path, name: str) -> Path:
    """Locate ``<name>.json`` anywhere below ``artifacts_dir`` (debug files excluded)."""
    if not artifacts_dir.is_dir():
        raise ConfigurationError(
            f"Artifacts directory not found: {artifacts_dir}",
            field="artifacts_dir",
            value=str(artifacts_dir),
        )

    conventional = artifacts_dir / "contracts" / f"{name}.sol" / f"{name}.json"
    if conventional.is_file():
        return conventional

    matches = sorted(artifacts_dir.rglob(f"{name}.json"))
    if not matches:
        raise ConfigurationError(
            f"No compiled artifact for {name} under {artifacts_dir}",
            field="artifact",
            value=name,
        )
    if len(matches) > 1:
        logger.warning("Multiple artifacts found for %s, using %s", name, matches[0])
    return matches[0]


def load_artifact(artifacts_dir: Path, name: str) -> ContractArtifact:
    path = find_artifact(artifacts_dir, name)
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Artifact contains invalid JSON: {path}", field="artifact", value=name
        ) from exc

    abi = data.get("abi")
    bytecode = data.get("bytecode")
    if not isinstance(abi, list) or not isinstance(bytecode, str) or bytecode in ("", "0x"):
        raise ConfigurationError(
            f"Artifact {path} has no deployable abi/bytecode", field="artifact", value=name
        )

    logger.debug("Loaded artifact for %s from %s", name, path)
    return ContractArtifact(name=name, abi=abi, bytecode=bytecode, path=path)
