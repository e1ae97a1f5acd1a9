"""Deployment outcomes and the append-only result file."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class DeploymentResult:
    """Outcome of one deployment attempt."""

    index: int  # 1-based position within the round
    deployer: Optional[str] = None
    address: Optional[str] = None
    tx_hash: Optional[str] = None
    gas_used: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.address is not None and self.error is None


@dataclass
class RoundReport:
    """What a deployment round attempted and achieved."""

    chain_id: int
    attempted: int
    results: list[DeploymentResult] = field(default_factory=list)

    @property
    def addresses(self) -> list[str]:
        return [r.address for r in self.results if r.ok]

    @property
    def failures(self) -> list[DeploymentResult]:
        return [r for r in self.results if not r.ok]


def format_result_line(chain_id: int, addresses: list[str]) -> str:
    return f"DEPLOYED_CONTRACTS_{chain_id}={','.join(addresses)}"


def append_result_line(result_path: Path | str, chain_id: int, addresses: list[str]) -> str:
    """
    Append one round's addresses to the result file.

    Each entry is written as a newline followed by the line text, so the
    file stays compatible with files produced by earlier versions.

    Returns:
        The line that was written (without the leading newline)
    """
    line = format_result_line(chain_id, addresses)
    path = Path(result_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write("\n" + line)
    return line

