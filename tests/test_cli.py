from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from transeptor_ccip.cli import cli
from transeptor_ccip.config import StaticConfigProvider

from .conftest import ACCOUNT, COUNTER, SIGNER, RecordingFactory


def _invoke(provider: StaticConfigProvider, factory: RecordingFactory, *args: str):
    runner = CliRunner()
    return runner.invoke(
        cli, list(args), obj={"config": provider, "client_factory": factory}
    )


def test_smart_account_deploy_prints_transaction_hash(
    provider: StaticConfigProvider, factory: RecordingFactory
) -> None:
    result = _invoke(
        provider,
        factory,
        "ccip-smart-account-deploy",
        "--destination-blockchain",
        "polygonMumbai",
        "--owner",
        SIGNER,
        "--salt",
        "1",
        "--pay-fees-in",
        "Native",
    )

    assert result.exit_code == 0, result.output
    assert "Sent successfully! Transaction hash: 0x" in result.output
    assert "CCIP Message ID: 0x" + "ab" * 32 in result.output
    assert "Task ccip-smart-account-deploy finished with the execution" in result.output


def test_invalid_pay_fees_in_exits_with_status_one(
    provider: StaticConfigProvider, factory: RecordingFactory
) -> None:
    result = _invoke(
        provider,
        factory,
        "ccip-smart-account-execute",
        "--destination-blockchain",
        "polygonMumbai",
        "--receiver",
        ACCOUNT,
        "--dest",
        COUNTER,
        "--pay-fees-in",
        "Bitcoin",
    )

    assert result.exit_code == 1
    assert "Invalid payFeesIn value: Bitcoin" in result.output
    assert factory.requests == []


def test_network_option_selects_the_task_network(
    provider: StaticConfigProvider, factory: RecordingFactory
) -> None:
    result = _invoke(
        provider,
        factory,
        "--network",
        "polygonMumbai",
        "get-message",
        "--receiver-address",
        ACCOUNT,
        "--blockchain",
        "ethereumSepolia",
    )

    assert result.exit_code == 1
    assert "This task can only be executed on the ethereumSepolia network" in result.output


def test_deploy_basic_counter_command(
    provider: StaticConfigProvider, factory: RecordingFactory
) -> None:
    artifact_dir = Path(provider.artifacts_dir) / "contracts" / "BasicCounter.sol"
    artifact_dir.mkdir(parents=True)
    (artifact_dir / "BasicCounter.json").write_text(
        json.dumps({"abi": [], "bytecode": "0x6080"}), encoding="utf-8"
    )

    result = _invoke(provider, factory, "deploy-basic-counter", "--owner", ACCOUNT)

    assert result.exit_code == 0, result.output
    assert f"Basic Counter deployed at address {COUNTER}" in result.output
    assert f"(owner){ACCOUNT} can now increment BasicCounter" in result.output


def test_missing_required_option_is_a_usage_error(
    provider: StaticConfigProvider, factory: RecordingFactory
) -> None:
    result = _invoke(provider, factory, "deploy-basic-counter")

    assert result.exit_code == 2


def test_unknown_log_level_is_a_usage_error(
    provider: StaticConfigProvider, factory: RecordingFactory
) -> None:
    result = _invoke(provider, factory, "--log-level", "foo", "deploy-basic-counter")

    assert result.exit_code == 2
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Invalid value for '--log-level'" in result.output


def test_log_level_is_case_insensitive(
    provider: StaticConfigProvider, factory: RecordingFactory
) -> None:
    result = _invoke(
        provider,
        factory,
        "--log-level",
        "debug",
        "get-message",
        "--receiver-address",
        ACCOUNT,
        "--blockchain",
        "nowhere",
    )

    assert result.exit_code == 1
    assert "Unknown blockchain nowhere" in result.output
