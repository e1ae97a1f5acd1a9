"""
Contract deployment execution.

Two strategies share the same per-attempt machinery:

- ``deploy_with_keys``: one attempt per private key, each key signing its own
  contract-creation transaction (profile-driven rounds).
- ``deploy_repeatedly``: one signer deploying the same contract N times
  (ad-hoc mode), constructor arguments requested before every attempt.

A failing attempt is logged and recorded; it never aborts the round. After
the loop one result line with the successful addresses is appended to the
result file.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Optional

from eth_account.signers.local import LocalAccount
from web3 import Web3

from ..config.logging_config import log_deployment
from ..config.profiles import DeploymentProfile
from ..config.settings import Settings
from ..exceptions import DeploymentFailedError
from ..helpers.abi_args import coerce_constructor_args
from ..helpers.compiler import CompiledArtifact
from ..helpers.web3_setup import get_web3_instance
from ..setup.keystore import account_from_key
from .results import DeploymentResult, RoundReport, append_result_line

logger = logging.getLogger(__name__)


def submit_deployment(
    w3: Web3,
    account: LocalAccount,
    artifact: CompiledArtifact,
    constructor_args: Sequence[Any],
    *,
    chain_id: int,
    gas_limit: int,
    receipt_timeout: float,
    index: int = 1,
) -> DeploymentResult:
    """
    Sign, broadcast and confirm one contract-creation transaction.

    Args:
        w3: Connected Web3 instance
        account: Signer
        artifact: Compiled contract (ABI + creation bytecode)
        constructor_args: ABI-typed constructor arguments; empty means the
                          constructor is called without arguments
        chain_id: Chain id used for replay protection
        gas_limit: Fixed gas limit override
        receipt_timeout: Seconds to wait for the receipt
        index: Attempt number, copied into the result

    Returns:
        DeploymentResult with address, transaction hash and gas used

    Raises:
        DeploymentFailedError: If the transaction was mined but reverted
        Exception: Whatever web3 raises for RPC, signing or timeout errors
    """
    contract = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
    if constructor_args:
        constructor = contract.constructor(*constructor_args)
    else:
        constructor = contract.constructor()

    tx = constructor.build_transaction({
        "from": account.address,
        "nonce": w3.eth.get_transaction_count(account.address, "pending"),
        "gas": gas_limit,
        "gasPrice": w3.eth.gas_price,
        "chainId": chain_id,
    })

    signed = account.sign_transaction(tx)
    tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
    tx_hex = Web3.to_hex(tx_hash)
    logger.info(f"⏳ Waiting for transaction confirmation... ({tx_hex})")

    receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=receipt_timeout)
    if receipt["status"] != 1:
        raise DeploymentFailedError(f"Contract creation reverted in transaction {tx_hex}")

    return DeploymentResult(
        index=index,
        deployer=account.address,
        address=receipt["contractAddress"],
        tx_hash=tx_hex,
        gas_used=receipt.get("gasUsed"),
    )


def _attempt(
    w3: Web3,
    index: int,
    total: int,
    make_account: Callable[[], LocalAccount],
    get_args: Callable[[], Sequence[Any]],
    artifact: CompiledArtifact,
    chain_id: int,
    settings: Settings,
) -> DeploymentResult:
    deployer = None
    try:
        account = make_account()
        deployer = account.address
        logger.info(f"Deploying contract {index}/{total} with account {deployer}...")
        result = submit_deployment(
            w3,
            account,
            artifact,
            get_args(),
            chain_id=chain_id,
            gas_limit=settings.gas_limit,
            receipt_timeout=settings.receipt_timeout,
            index=index,
        )
    except Exception as e:
        logger.debug(f"Deployment {index} traceback", exc_info=True)
        result = DeploymentResult(index=index, deployer=deployer, error=f"{type(e).__name__}: {e}")

    log_deployment(logger, index, total, result.deployer, result.address, result.tx_hash, result.error)
    return result


def _finish_round(report: RoundReport, settings: Settings) -> RoundReport:
    line = append_result_line(settings.result_path, report.chain_id, report.addresses)
    logger.info(f"📝 Appended to {settings.result_path}: {line}")
    failed = len(report.failures)
    if failed:
        logger.warning(f"{failed} of {report.attempted} deployment(s) failed")
    logger.info(f"✅ All deployments complete! {len(report.addresses)}/{report.attempted} succeeded 🎉")
    return report


def deploy_with_keys(
    profile: DeploymentProfile,
    artifact: CompiledArtifact,
    private_keys: Sequence[str],
    settings: Settings,
    w3: Optional[Web3] = None,
) -> Optional[RoundReport]:
    """
    Run one deployment round: one attempt per private key.

    Args:
        profile: Target network, chain id and constructor arguments
        artifact: Compiled contract
        private_keys: Keys in processing order
        settings: Run-wide settings (gas limit, result file, timeouts)
        w3: Web3 instance (defaults to one connected to profile.rpc_url)

    Returns:
        RoundReport, or None when there was no key to attempt

    Raises:
        ConfigurationError: If the profile's constructor arguments do not fit
                            the compiled constructor
    """
    total = len(private_keys)
    if total == 0:
        logger.error(f"❌ No private keys found in {settings.keys_path}!")
        return None

    args = coerce_constructor_args(artifact.constructor_inputs, profile.constructor_args)

    logger.info(f"🚀 Deploying with {total} account(s) using profile: {profile.name}")
    logger.info(f"Constructor arguments: {args}")

    if w3 is None:
        w3 = get_web3_instance(profile.rpc_url)

    report = RoundReport(chain_id=profile.chain_id, attempted=total)
    for index, key in enumerate(private_keys, start=1):
        report.results.append(
            _attempt(
                w3,
                index,
                total,
                lambda key=key: account_from_key(key),
                lambda: args,
                artifact,
                profile.chain_id,
                settings,
            )
        )

    return _finish_round(report, settings)


def deploy_repeatedly(
    profile: DeploymentProfile,
    artifact: CompiledArtifact,
    private_key: str,
    count: int,
    settings: Settings,
    args_provider: Callable[[], Sequence[Any]],
    w3: Optional[Web3] = None,
) -> RoundReport:
    """
    Deploy the same contract ``count`` times with a single signer.

    ``args_provider`` is asked for raw constructor arguments before every
    attempt when the constructor takes parameters; the values are converted
    to their ABI types. A bad answer fails that attempt only.
    """
    if w3 is None:
        w3 = get_web3_instance(profile.rpc_url)

    if artifact.has_constructor_params:
        def get_args() -> list[Any]:
            return coerce_constructor_args(artifact.constructor_inputs, args_provider())
    else:
        def get_args() -> list[Any]:
            return []

    logger.info(f"🚀 Deploying {count} contract(s)...")

    report = RoundReport(chain_id=profile.chain_id, attempted=count)
    for index in range(1, count + 1):
        report.results.append(
            _attempt(
                w3,
                index,
                count,
                lambda: account_from_key(private_key),
                get_args,
                artifact,
                profile.chain_id,
                settings,
            )
        )

    return _finish_round(report, settings)
