"""
treestore Core Module

Configuration shared by every store instance.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    FilesystemConfig,
    LoggingConfig,
    SearchConfig,
    configure_logging,
    get_config,
)

__all__ = [
    'Config',
    'ConfigLoader',
    'FilesystemConfig',
    'LoggingConfig',
    'SearchConfig',
    'configure_logging',
    'get_config',
]
