"""Custom exception classes for autodeploy."""


class AutoDeployError(Exception):
    """Base exception for autodeploy errors."""

    pass


class ConfigurationError(AutoDeployError, ValueError):
    """Raised when profiles, keys, settings or operator input are unusable."""

    pass


class CompilationError(AutoDeployError, RuntimeError):
    """Raised when the Solidity compiler fails or produces no contract."""

    pass


class DeploymentFailedError(AutoDeployError, RuntimeError):
    """Raised when a contract-creation transaction is mined but reverted."""

    pass
