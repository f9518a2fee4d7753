"""
treestore - An in-memory hierarchical namespace

Files and directories held in a single owned tree, with path-based
create, read, write, rename, copy, delete and tag/MIME search.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .filesystem import TreeStore, Metadata, Permissions, File, Directory
from .core import Config, ConfigLoader, get_config, configure_logging
from .logger import Logger, LogLevel, get_logger

__all__ = [
    'TreeStore',
    'Metadata',
    'Permissions',
    'File',
    'Directory',
    'Config',
    'ConfigLoader',
    'get_config',
    'configure_logging',
    'Logger',
    'LogLevel',
    'get_logger',
]
