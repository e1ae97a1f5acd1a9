"""
Configuration package for autodeploy.

Profiles, run-wide settings and logging setup.
"""

from .logging_config import get_command_logger, log_deployment, setup_logger
from .profiles import DeploymentProfile, load_profiles, parse_chain_id
from .settings import Settings, load_settings

__all__ = [
    # Profiles
    'DeploymentProfile',
    'load_profiles',
    'parse_chain_id',

    # Settings
    'Settings',
    'load_settings',

    # Logging
    'setup_logger',
    'log_deployment',
    'get_command_logger',
]
