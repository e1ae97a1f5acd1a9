"""Shared pytest fixtures for autodeploy tests."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

from autodeploy.config.settings import Settings
from autodeploy.config.profiles import DeploymentProfile
from autodeploy.executor.results import DeploymentResult
from autodeploy.helpers import compiler, web3_setup
from autodeploy.helpers.compiler import CompiledArtifact

# Valid secp256k1 keys; never funded anywhere
TEST_KEYS = ["0x" + "11" * 32, "0x" + "22" * 32, "0x" + "33" * 32]

CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH = b"\x12" * 32

COUNTER_ABI: List[Dict[str, Any]] = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "initial", "type": "uint256", "internalType": "uint256"},
            {"name": "owner", "type": "address", "internalType": "address"},
        ],
    },
    {
        "type": "function",
        "name": "count",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256", "internalType": "uint256"}],
    },
]

PLAIN_ABI: List[Dict[str, Any]] = [
    {
        "type": "function",
        "name": "ping",
        "stateMutability": "pure",
        "inputs": [],
        "outputs": [{"name": "", "type": "bool", "internalType": "bool"}],
    },
]


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path: Path, monkeypatch):
    """Run every test in an empty directory with no autodeploy env vars."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "AUTODEPLOY_CONFIG",
        "AUTODEPLOY_KEYS_FILE",
        "AUTODEPLOY_RESULT_FILE",
        "AUTODEPLOY_INTERVAL",
        "AUTODEPLOY_GAS_LIMIT",
        "AUTODEPLOY_RECEIPT_TIMEOUT",
        "SOLC_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AUTODEPLOY_LOG_DIR", str(tmp_path / "logs"))
    compiler.clear_compile_cache()
    web3_setup.reset_web3_cache()
    yield
    logger = logging.getLogger("autodeploy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def counter_artifact() -> CompiledArtifact:
    """Artifact whose constructor takes (uint256, address)."""
    return CompiledArtifact(contract_name="Counter", abi=COUNTER_ABI, bytecode="0x6080604052")


@pytest.fixture
def plain_artifact() -> CompiledArtifact:
    """Artifact without constructor parameters."""
    return CompiledArtifact(contract_name="Ping", abi=PLAIN_ABI, bytecode="0x6080604052")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        config_path=tmp_path / "config.json",
        keys_path=tmp_path / "privatekeys.txt",
        result_path=tmp_path / "hasilDeploy.txt",
        interval_seconds=0,
        gas_limit=3_000_000,
        solc_version="0.8.24",
        receipt_timeout=5,
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def plain_profile() -> DeploymentProfile:
    return DeploymentProfile(
        name="Local ping",
        rpc_url="http://127.0.0.1:8545",
        chain_id=31337,
        contract_path="contracts/Ping.sol",
    )


@pytest.fixture
def counter_profile() -> DeploymentProfile:
    return DeploymentProfile(
        name="Sepolia counter",
        rpc_url="http://127.0.0.1:8545",
        chain_id=11155111,
        contract_path="contracts/Counter.sol",
        constructor_args=("42", "0x" + "ab" * 20),
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """config.json with two profiles and the contract files they point to."""
    contracts = tmp_path / "contracts"
    contracts.mkdir()
    (contracts / "Ping.sol").write_text("// SPDX-License-Identifier: MIT\npragma solidity ^0.8.0;\ncontract Ping {}\n")
    (contracts / "Counter.sol").write_text("// SPDX-License-Identifier: MIT\npragma solidity ^0.8.0;\ncontract Counter {}\n")
    data = [
        {
            "name": "Local ping",
            "RPC_URL": "http://127.0.0.1:8545",
            "CHAIN_ID": 31337,
            "CONTRACT_PATH": "contracts/Ping.sol",
        },
        {
            "name": "Sepolia counter",
            "RPC_URL": "http://127.0.0.1:8545",
            "CHAIN_ID": "11155111",
            "CONTRACT_PATH": "contracts/Counter.sol",
            "CONSTRUCTOR_ARGS": [42, "0x" + "ab" * 20],
        },
    ]
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def keys_file(tmp_path: Path) -> Path:
    """Three keys separated by blank and whitespace-only lines."""
    path = tmp_path / "privatekeys.txt"
    path.write_text(f"\n{TEST_KEYS[0]}\n\n   \n{TEST_KEYS[1]}  \n{TEST_KEYS[2]}\n\n")
    return path


@pytest.fixture
def fake_w3() -> MagicMock:
    """A Web3 stand-in whose transactions are always mined successfully."""
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.gas_price = 1_000_000_000
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        "status": 1,
        "contractAddress": CONTRACT_ADDRESS,
        "gasUsed": 123_456,
    }
    return w3


class FakeSubmitter:
    """Replacement for submit_deployment that records calls and fails on demand."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, w3, account, artifact, constructor_args, *, chain_id, gas_limit, receipt_timeout, index=1):
        self.calls.append(
            {
                "deployer": account.address,
                "args": list(constructor_args),
                "chain_id": chain_id,
                "gas_limit": gas_limit,
                "index": index,
            }
        )
        if account.address in self.fail_for:
            raise ValueError("insufficient funds for gas * price + value")
        return DeploymentResult(
            index=index,
            deployer=account.address,
            address="0x" + f"{len(self.calls):040x}",
            tx_hash="0x" + f"{len(self.calls):064x}",
            gas_used=100_000,
        )


@pytest.fixture
def private_keys() -> List[str]:
    return list(TEST_KEYS)


@pytest.fixture
def make_submitter(monkeypatch):
    """Install a FakeSubmitter that fails for the given deployer addresses."""

    def _install(fail_for=()) -> FakeSubmitter:
        submitter = FakeSubmitter(fail_for)
        monkeypatch.setattr("autodeploy.executor.deployer.submit_deployment", submitter)
        return submitter

    return _install


@pytest.fixture
def stub_compiler(monkeypatch, counter_artifact, plain_artifact):
    """Replace solc: Counter.sol yields counter_artifact, anything else plain_artifact."""
    calls = []

    def _compile(source, contract_path, solc_version, use_cache=True):
        calls.append(contract_path)
        return counter_artifact if "Counter" in contract_path else plain_artifact

    monkeypatch.setattr("autodeploy.commands.profile_bot.compile_contract", _compile)
    monkeypatch.setattr("autodeploy.commands.adhoc_deploy.compile_contract", _compile)
    return calls
