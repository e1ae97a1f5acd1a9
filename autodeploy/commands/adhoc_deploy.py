#!/usr/bin/env python3
"""
Ad-hoc deployment: connection parameters typed at the prompt.

Asks for RPC URL, private key (hidden), chain id and contract path, then for
a number of deployments, and deploys the contract that many times with the
single signer. Constructor arguments, when the constructor takes any, are
asked for before every deployment.
"""
from __future__ import annotations

import getpass
import logging
from collections.abc import Callable
from typing import Optional

from web3 import Web3

from ..config.profiles import DeploymentProfile, parse_chain_id
from ..config.settings import Settings
from ..exceptions import AutoDeployError, ConfigurationError
from ..executor.deployer import deploy_repeatedly
from ..helpers.abi_args import split_arg_string
from ..helpers.compiler import compile_contract, load_contract_source
from ..setup.keystore import account_from_key
from .profile_bot import print_banner

logger = logging.getLogger(__name__)


def parse_count(raw: str) -> int:
    try:
        count = int(str(raw).strip())
    except ValueError:
        raise ConfigurationError("Invalid number! Please enter a positive number.") from None
    if count <= 0:
        raise ConfigurationError("Invalid number! Please enter a positive number.")
    return count


def prompt_profile(
    input_fn: Callable[[str], str] = input,
    secret_fn: Callable[[str], str] = getpass.getpass,
) -> tuple[DeploymentProfile, str]:
    """
    Collect connection parameters from the operator.

    Returns:
        (profile, private_key)

    Raises:
        ConfigurationError: If an answer is missing or invalid
    """
    rpc_url = input_fn("Enter RPC URL: ").strip()
    private_key = secret_fn("Enter Private Key: ").strip()
    chain_id = input_fn("Enter Chain ID: ").strip()
    contract_path = input_fn("Enter contract source file path: ").strip()

    if not (rpc_url and private_key and chain_id and contract_path):
        raise ConfigurationError("Missing required inputs!")

    try:
        account_from_key(private_key)
    except ValueError as e:
        raise ConfigurationError(f"Invalid private key: {e}") from None

    profile = DeploymentProfile(
        name="ad-hoc",
        rpc_url=rpc_url,
        chain_id=parse_chain_id(chain_id),
        contract_path=contract_path,
    )
    return profile, private_key


def run_adhoc_mode(
    settings: Settings,
    input_fn: Callable[[str], str] = input,
    secret_fn: Callable[[str], str] = getpass.getpass,
    w3: Optional[Web3] = None,
) -> int:
    """Run the ad-hoc deployment flow; returns the process exit code."""
    try:
        profile, private_key = prompt_profile(input_fn, secret_fn)

        print_banner("autodeploy - ad-hoc mode")
        count = parse_count(input_fn("Enter number of deployments: "))

        source = load_contract_source(profile.contract_path)
        artifact = compile_contract(source, profile.contract_path, settings.solc_version)
    except AutoDeployError as e:
        logger.error(f"❌ {e}")
        return 1

    def ask_args() -> list[str]:
        return split_arg_string(
            input_fn("Enter constructor arguments (comma-separated, or leave blank if none): ")
        )

    try:
        deploy_repeatedly(profile, artifact, private_key, count, settings, ask_args, w3=w3)
    except KeyboardInterrupt:
        print("\n↩︎  Interrupted, exiting.")
    return 0
