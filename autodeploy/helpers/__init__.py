"""Solidity compilation, ABI argument handling and RPC connection helpers."""
