"""
Solidity compilation through py-solc-x.

The contract source is handed to ``solcx.compile_standard`` using the standard
JSON input format; the first contract found for the source path is returned.
Results are memoized per (path, source, compiler version) so re-reading an
unchanged file every round does not invoke the compiler again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from packaging.version import Version
from solcx import compile_standard, get_installed_solc_versions, install_solc
from solcx.exceptions import SolcError

from ..exceptions import CompilationError, ConfigurationError

logger = logging.getLogger(__name__)

OUTPUT_SELECTION = {"*": {"*": ["abi", "evm.bytecode"]}}

_ARTIFACT_CACHE: dict[tuple[str, str, str], "CompiledArtifact"] = {}


@dataclass(frozen=True)
class CompiledArtifact:
    """ABI and creation bytecode of one compiled contract."""

    contract_name: str
    abi: list[dict[str, Any]]
    bytecode: str  # 0x-prefixed creation bytecode

    @property
    def constructor_inputs(self) -> list[dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return list(item.get("inputs") or [])
        return []

    @property
    def has_constructor_params(self) -> bool:
        return len(self.constructor_inputs) > 0


def load_contract_source(contract_path: str | Path) -> str:
    """Read Solidity source text; a missing file is a configuration error."""
    try:
        return Path(contract_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to load contract source {contract_path}: {e}") from e


def build_standard_input(source: str, contract_path: str) -> dict[str, Any]:
    return {
        "language": "Solidity",
        "sources": {contract_path: {"content": source}},
        "settings": {"outputSelection": OUTPUT_SELECTION},
    }


def ensure_solc(solc_version: str) -> None:
    """Install the requested solc release through py-solc-x if it is not present."""
    try:
        if Version(solc_version) in get_installed_solc_versions():
            return
        logger.info(f"Installing solc {solc_version}...")
        install_solc(solc_version)
    except Exception as e:
        raise CompilationError(f"Unable to install solc {solc_version}: {e}") from e


def extract_artifact(output: dict[str, Any], contract_path: str) -> CompiledArtifact:
    """
    Pick the first contract compiled from ``contract_path``.

    Args:
        output: Decoded standard JSON output of the compiler
        contract_path: Source key used in the standard JSON input

    Returns:
        CompiledArtifact for the first contract name in the output map

    Raises:
        CompilationError: If the output holds no contract for the path
    """
    contracts = (output.get("contracts") or {}).get(contract_path) or {}
    names = list(contracts.keys())
    if not names:
        raise CompilationError(f"No contract found in compiler output for {contract_path}")

    contract_name = names[0]
    contract = contracts[contract_name]
    try:
        abi = contract["abi"]
        bytecode = contract["evm"]["bytecode"]["object"]
    except KeyError as e:
        raise CompilationError(f"Compiler output for {contract_name} is missing {e}") from e

    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return CompiledArtifact(contract_name=contract_name, abi=abi, bytecode=bytecode)


def compile_contract(source: str, contract_path: str, solc_version: str, use_cache: bool = True) -> CompiledArtifact:
    """
    Compile Solidity source and return the first contract's artifact.

    Args:
        source: Solidity source text
        contract_path: Logical path of the source (key in the compiler input)
        solc_version: solc release to use, e.g. "0.8.24"
        use_cache: Reuse a previous result for identical inputs

    Returns:
        CompiledArtifact

    Raises:
        CompilationError: If compilation fails or yields no contract
    """
    key = (contract_path, source, solc_version)
    if use_cache and key in _ARTIFACT_CACHE:
        logger.debug(f"Using cached compilation of {contract_path}")
        return _ARTIFACT_CACHE[key]

    logger.info(f"📦 Compiling {contract_path} with solc {solc_version}...")
    ensure_solc(solc_version)

    allow_dir = str(Path(contract_path).resolve().parent)
    try:
        output = compile_standard(
            build_standard_input(source, contract_path),
            solc_version=solc_version,
            allow_paths=allow_dir,
        )
    except SolcError as e:
        raise CompilationError(f"Compilation of {contract_path} failed: {e}") from e

    artifact = extract_artifact(output, contract_path)
    logger.info(f"✅ Compiled {artifact.contract_name} ({(len(artifact.bytecode) - 2) // 2} bytes)")

    _ARTIFACT_CACHE[key] = artifact
    return artifact


def clear_compile_cache() -> None:
    _ARTIFACT_CACHE.clear()
