"""
autodeploy: compile a Solidity contract and deploy it repeatedly to an EVM chain
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    AutoDeployError,
    CompilationError,
    ConfigurationError,
    DeploymentFailedError,
)

try:
    __version__ = version("autodeploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "AutoDeployError",
    "ConfigurationError",
    "CompilationError",
    "DeploymentFailedError",
]
