"""Conversion of operator-supplied constructor arguments to ABI-typed values."""
from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any

from eth_utils import to_checksum_address

from ..exceptions import ConfigurationError

_ARRAY_RE = re.compile(r"^(.*)\[(\d*)\]$")

_TRUE = {"true", "1", "yes", "y"}
_FALSE = {"false", "0", "no", "n", ""}


def split_arg_string(text: str) -> list[str]:
    """'a, b ,c' -> ['a', 'b', 'c']. Empty input means no arguments."""
    if not text.strip():
        return []
    return [part.strip() for part in text.split(",")]


def coerce_value(abi_type: str, value: Any) -> Any:
    """Convert one value to what web3 expects for ``abi_type``."""
    array = _ARRAY_RE.match(abi_type)
    if array:
        inner = array.group(1)
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                raise ConfigurationError(f"Expected a JSON array for {abi_type}, got {value!r}") from None
        if not isinstance(value, list):
            raise ConfigurationError(f"Expected a list for {abi_type}, got {value!r}")
        return [coerce_value(inner, item) for item in value]

    if abi_type.startswith(("uint", "int")):
        if isinstance(value, bool):
            raise ConfigurationError(f"Expected an integer for {abi_type}, got {value!r}")
        if isinstance(value, int):
            return value
        text = str(value).strip()
        base = 16 if text.lstrip("+-").lower().startswith("0x") else 10
        try:
            return int(text, base)
        except ValueError:
            raise ConfigurationError(f"Expected an integer for {abi_type}, got {value!r}") from None

    if abi_type == "bool":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ConfigurationError(f"Expected a boolean, got {value!r}")

    if abi_type == "address":
        try:
            return to_checksum_address(str(value).strip())
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid address: {value!r}") from None

    if abi_type == "string":
        return str(value)

    # bytes, bytesN, tuples: web3 accepts hex strings / decoded JSON as given
    return value


def coerce_constructor_args(inputs: Sequence[dict[str, Any]], raw_args: Sequence[Any]) -> list[Any]:
    """
    Match raw constructor arguments against the constructor's ABI inputs.

    Args:
        inputs: ABI ``inputs`` of the constructor (empty if none)
        raw_args: Values from configuration or operator input

    Returns:
        List with exactly one converted value per input

    Raises:
        ConfigurationError: On a count mismatch or an unconvertible value
    """
    if len(raw_args) != len(inputs):
        raise ConfigurationError(
            f"Constructor expects {len(inputs)} argument(s), got {len(raw_args)}"
        )
    return [coerce_value(inp.get("type", ""), raw) for inp, raw in zip(inputs, raw_args)]
