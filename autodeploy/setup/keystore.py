from __future__ import annotations

import logging
from pathlib import Path

from eth_account import Account
from eth_account.signers.local import LocalAccount

logger = logging.getLogger(__name__)


def normalize_privkey_hex(pk: str) -> str:
    if not isinstance(pk, str):
        raise ValueError("private key must be a hex string")
    pk = pk.strip()
    if pk.startswith("0x"):
        pk = pk[2:]
    if len(pk) != 64:
        raise ValueError("private key hex must be 64 characters (32 bytes)")
    int(pk, 16)  # validate hex
    return "0x" + pk


def parse_private_keys(text: str) -> list[str]:
    """Split key-file text into keys: one per line, blank lines dropped, order kept."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def read_private_keys(path: Path | str) -> list[str]:
    """Read the key file. A missing or unreadable file yields no keys."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read private keys from {path}: {e}")
        return []
    return parse_private_keys(text)


def account_from_key(private_key: str) -> LocalAccount:
    """Bind a signing identity to a raw key string (with or without 0x)."""
    return Account.from_key(normalize_privkey_hex(private_key))
