"""Deployment profile loading for autodeploy."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from ..exceptions import ConfigurationError


REQUIRED_FIELDS = ("name", "RPC_URL", "CHAIN_ID", "CONTRACT_PATH")


@dataclass(frozen=True)
class DeploymentProfile:
    """A named target: where to deploy, which source, which constructor arguments."""

    name: str
    rpc_url: str
    chain_id: int
    contract_path: str
    constructor_args: tuple = field(default_factory=tuple)


def parse_chain_id(value: Any) -> int:
    """Accept 11155111 or "11155111"; reject anything else."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid chain id: {value!r}")
    try:
        chain_id = int(str(value).strip(), 10)
    except ValueError:
        raise ConfigurationError(f"Invalid chain id: {value!r}") from None
    if chain_id <= 0:
        raise ConfigurationError(f"Invalid chain id: {value!r}")
    return chain_id


def parse_profile(entry: Any, position: int) -> DeploymentProfile:
    """
    Convert one raw configuration entry into a DeploymentProfile.

    Args:
        entry: Decoded JSON object
        position: 1-based position in the configuration list (for messages)

    Raises:
        ConfigurationError: If the entry is malformed
    """
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Profile #{position} must be an object")

    missing = [f for f in REQUIRED_FIELDS if f not in entry or entry[f] in (None, "")]
    if missing:
        raise ConfigurationError(f"Profile #{position} is missing: {', '.join(missing)}")

    args = entry.get("CONSTRUCTOR_ARGS")
    if args is None:
        args = []
    if not isinstance(args, list):
        raise ConfigurationError(f"Profile #{position}: CONSTRUCTOR_ARGS must be a list")

    return DeploymentProfile(
        name=str(entry["name"]),
        rpc_url=str(entry["RPC_URL"]),
        chain_id=parse_chain_id(entry["CHAIN_ID"]),
        contract_path=str(entry["CONTRACT_PATH"]),
        constructor_args=tuple(args),
    )


def load_profiles(path: Union[Path, str]) -> list[DeploymentProfile]:
    """
    Load the list of deployment profiles.

    Args:
        path: Path to config.json

    Returns:
        Profiles in file order

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, not a list,
                            empty, or any entry is malformed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ConfigurationError(f"Configuration file {path} must contain a list of profiles")
    if not data:
        raise ConfigurationError(f"Configuration file {path} contains no profiles")

    return [parse_profile(entry, i) for i, entry in enumerate(data, start=1)]
