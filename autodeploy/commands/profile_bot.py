#!/usr/bin/env python3
"""
Profile-driven deployment bot.

Lists the profiles from config.json, lets the operator pick one, compiles
its contract and then deploys it once per private key, every N minutes,
until a round finds no keys or the process is stopped.

Usage
-----
    autodeploy profile                      # interactive menu
    autodeploy profile --profile 2 --once   # non-interactive single round

config.json
-----------
    [
      {
        "name": "Sepolia counter",
        "RPC_URL": "https://rpc.sepolia.org",
        "CHAIN_ID": 11155111,
        "CONTRACT_PATH": "contracts/Counter.sol",
        "CONSTRUCTOR_ARGS": [42]
      }
    ]
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Optional

from web3 import Web3

from ..config.profiles import DeploymentProfile, load_profiles
from ..config.settings import Settings
from ..exceptions import AutoDeployError, ConfigurationError
from ..executor.deployer import deploy_with_keys
from ..executor.scheduler import install_stop_handler, run_rounds
from ..helpers.compiler import CompiledArtifact, compile_contract, load_contract_source
from ..setup.keystore import read_private_keys

logger = logging.getLogger(__name__)

BANNER_WIDTH = 50


def print_banner(title: str) -> None:
    print("=" * BANNER_WIDTH)
    print(title.center(BANNER_WIDTH))
    print("=" * BANNER_WIDTH)


def print_menu(profiles: Sequence[DeploymentProfile]) -> None:
    print("\nAvailable configurations:\n")
    for i, profile in enumerate(profiles, start=1):
        print(f"{i}. {profile.name}")
    print("0. Exit")


def parse_selection(raw: str, count: int) -> int:
    """Validate a menu answer: an integer in [0, count]."""
    try:
        selection = int(str(raw).strip())
    except ValueError:
        raise ConfigurationError(f"Invalid selection: {raw!r}") from None
    if selection < 0 or selection > count:
        raise ConfigurationError(f"Invalid selection: {selection} (choose 0-{count})")
    return selection


def choose_profile(
    profiles: Sequence[DeploymentProfile],
    selection: Optional[int] = None,
    input_fn: Callable[[str], str] = input,
) -> Optional[DeploymentProfile]:
    """Return the chosen profile, or None when the operator picked Exit."""
    if selection is None:
        print_menu(profiles)
        raw = input_fn("\nEnter the number of the configuration to use: ")
    else:
        raw = str(selection)

    index = parse_selection(raw, len(profiles))
    if index == 0:
        return None
    return profiles[index - 1]


def compile_profile(profile: DeploymentProfile, settings: Settings) -> CompiledArtifact:
    """Load the profile's source and compile it (memoized across rounds)."""
    source = load_contract_source(profile.contract_path)
    return compile_contract(source, profile.contract_path, settings.solc_version)


def run_profile_mode(
    settings: Settings,
    selection: Optional[int] = None,
    once: bool = False,
    input_fn: Callable[[str], str] = input,
    stop_event: Optional[threading.Event] = None,
    w3: Optional[Web3] = None,
) -> int:
    """
    Run the profile-driven bot.

    Returns:
        Process exit code: 0 for Exit / stop / finished, 1 for any fatal error
    """
    print_banner("autodeploy - profile mode")

    try:
        profiles = load_profiles(settings.config_path)
        profile = choose_profile(profiles, selection, input_fn)
        if profile is None:
            print("Exiting...")
            return 0

        logger.info(
            f"Selected profile '{profile.name}' (chain {profile.chain_id}, {profile.contract_path})"
        )
        compile_profile(profile, settings)
    except AutoDeployError as e:
        logger.error(f"❌ {e}")
        return 1

    def one_round() -> bool:
        keys = read_private_keys(settings.keys_path)
        artifact = compile_profile(profile, settings)
        return deploy_with_keys(profile, artifact, keys, settings, w3=w3) is not None

    if stop_event is None:
        stop_event = threading.Event()
        install_stop_handler(stop_event)

    try:
        ok = run_rounds(
            one_round,
            settings.interval_seconds,
            stop_event,
            max_rounds=1 if once else None,
        )
    except AutoDeployError as e:
        logger.error(f"❌ {e}")
        return 1
    except KeyboardInterrupt:
        print("\n↩︎  Interrupted, exiting.")
        return 0

    if not ok:
        logger.error("❌ Deployment failed. Please check your configuration and private keys.")
        return 1
    return 0
