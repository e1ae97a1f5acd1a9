"""
Run-wide settings for autodeploy.

Values are resolved once per process, in this order:
CLI flag > environment variable (optionally loaded from a .env file) > default.
The resulting Settings object is passed explicitly to every component.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv

from ..exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_KEYS_PATH = "privatekeys.txt"
DEFAULT_RESULT_PATH = "hasilDeploy.txt"
DEFAULT_LOG_DIR = "logs"

DEFAULT_GAS_LIMIT = 3_000_000
DEFAULT_INTERVAL_SECONDS = 5 * 60
DEFAULT_SOLC_VERSION = "0.8.24"
DEFAULT_RECEIPT_TIMEOUT = 120  # seconds, same as web3's default


@dataclass(frozen=True)
class Settings:
    """Immutable parameters shared by the loader, compiler and executor."""

    config_path: Path = Path(DEFAULT_CONFIG_PATH)
    keys_path: Path = Path(DEFAULT_KEYS_PATH)
    result_path: Path = Path(DEFAULT_RESULT_PATH)
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS
    gas_limit: int = DEFAULT_GAS_LIMIT
    solc_version: str = DEFAULT_SOLC_VERSION
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    log_dir: Path = Path(DEFAULT_LOG_DIR)


def _pick(cli_value: Any, env_name: str, default: Any) -> Any:
    if cli_value is not None:
        return cli_value
    env_value = os.getenv(env_name)
    if env_value is not None and env_value.strip() != "":
        return env_value.strip()
    return default


def _as_int(value: Any, name: str) -> int:
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None
    if result <= 0:
        raise ConfigurationError(f"{name} must be positive, got {result}")
    return result


def _as_seconds(value: Any, name: str) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}") from None
    if result < 0:
        raise ConfigurationError(f"{name} must not be negative, got {result}")
    return result


def load_settings(
    env_file: Optional[str] = None,
    config_path: Optional[str] = None,
    keys_path: Optional[str] = None,
    result_path: Optional[str] = None,
    interval_seconds: Optional[float] = None,
    gas_limit: Optional[int] = None,
    solc_version: Optional[str] = None,
    receipt_timeout: Optional[float] = None,
    log_dir: Optional[str] = None,
) -> Settings:
    """
    Build the Settings object for this run.

    Args:
        env_file: .env file to load before reading the environment
                  (defaults to ./.env when present)
        config_path .. log_dir: explicit overrides, usually from CLI flags

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If a numeric value cannot be parsed
    """
    if env_file:
        if not Path(env_file).exists():
            raise ConfigurationError(f"Environment file not found: {env_file}")
        load_dotenv(env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        config_path=Path(_pick(config_path, "AUTODEPLOY_CONFIG", DEFAULT_CONFIG_PATH)),
        keys_path=Path(_pick(keys_path, "AUTODEPLOY_KEYS_FILE", DEFAULT_KEYS_PATH)),
        result_path=Path(_pick(result_path, "AUTODEPLOY_RESULT_FILE", DEFAULT_RESULT_PATH)),
        interval_seconds=_as_seconds(
            _pick(interval_seconds, "AUTODEPLOY_INTERVAL", DEFAULT_INTERVAL_SECONDS),
            "AUTODEPLOY_INTERVAL",
        ),
        gas_limit=_as_int(_pick(gas_limit, "AUTODEPLOY_GAS_LIMIT", DEFAULT_GAS_LIMIT), "AUTODEPLOY_GAS_LIMIT"),
        solc_version=str(_pick(solc_version, "SOLC_VERSION", DEFAULT_SOLC_VERSION)),
        receipt_timeout=_as_seconds(
            _pick(receipt_timeout, "AUTODEPLOY_RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT),
            "AUTODEPLOY_RECEIPT_TIMEOUT",
        ),
        log_dir=Path(_pick(log_dir, "AUTODEPLOY_LOG_DIR", DEFAULT_LOG_DIR)),
    )
