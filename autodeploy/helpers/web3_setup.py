"""
Web3 setup helper - provides the JSON-RPC connection used for deployments.

Public API
----------
get_web3_instance(rpc_url)
    Return a Web3 instance connected to the specified RPC URL.
"""
from __future__ import annotations

from typing import Optional

from web3 import Web3

__all__ = ["get_web3_instance", "reset_web3_cache"]

# Cached web3 instance
_w3_instance: Optional[Web3] = None


def get_web3_instance(rpc_url: str) -> Web3:
    """
    Get a Web3 instance connected to the specified RPC URL.

    Args:
        rpc_url: HTTP(S) JSON-RPC endpoint of the active profile

    Returns:
        Web3 instance (reused while the URL stays the same)
    """
    global _w3_instance

    # Return cached instance if URL matches
    if _w3_instance is not None and _w3_instance.provider.endpoint_uri == rpc_url:
        return _w3_instance

    _w3_instance = Web3(Web3.HTTPProvider(rpc_url))
    return _w3_instance


def reset_web3_cache() -> None:
    global _w3_instance
    _w3_instance = None
