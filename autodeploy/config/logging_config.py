"""
Logging Configuration for autodeploy

Provides structured logging with:
- Timestamps
- Console and file handlers
- File rotation (1 file per day)
- Separate error log
"""

import logging
import sys
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


# Log formats
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str,
    log_dir: Path,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
) -> logging.Logger:
    """
    Setup a logger with console and file handlers.

    Args:
        name: Logger name (typically the command name)
        log_dir: Directory for log files (Settings.log_dir)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name (defaults to name.log)
        console: Whether to log to console
        detailed: Whether to use detailed format (includes file/line)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("autodeploy", Path("logs"), level=logging.DEBUG)
        >>> logger.info("Starting deployment round")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_format = DETAILED_FORMAT if detailed else SIMPLE_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if log_file is None:
        log_file = f"{name}.log"

    file_handler = TimedRotatingFileHandler(
        log_dir / log_file,
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Separate error log
    error_handler = RotatingFileHandler(
        log_dir / f"{name}_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


def log_deployment(
    logger: logging.Logger,
    index: int,
    total: int,
    deployer: Optional[str],
    address: Optional[str] = None,
    tx_hash: Optional[str] = None,
    error: Optional[str] = None,
):
    """
    Log a single deployment attempt in structured format.

    Args:
        logger: Logger instance
        index: 1-based attempt number within the round
        total: Number of attempts in the round
        deployer: Deployer address (None when the key could not be loaded)
        address: Deployed contract address on success
        tx_hash: Creation transaction hash
        error: Error description on failure
    """
    status = "SUCCESS" if error is None else "FAILED"
    msg = f"{status} | {index}/{total} | Deployer: {deployer or '?'}"
    if address:
        msg += f" | Contract: {address}"
    if tx_hash:
        msg += f" | TX: {tx_hash}"
    if error is not None:
        msg += f" | Error: {error}"
        logger.error(msg)
    else:
        logger.info(msg)


def get_command_logger(command: str, log_dir: Path, debug: bool = False) -> logging.Logger:
    """Get the logger used by a CLI command and everything below it."""
    level = logging.DEBUG if debug else logging.INFO
    return setup_logger("autodeploy", log_dir, level=level, log_file=f"{command}.log", detailed=debug)
