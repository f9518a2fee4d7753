"""
treestore Exception Hierarchy

Architecture:
    FileSystemException (Base)
    ├── NotFoundError
    ├── AlreadyExistsError
    ├── PermissionDeniedError
    ├── DirectoryNotEmptyError
    ├── InvalidPathError
    ├── IsADirectoryError
    └── NotADirectoryError

    ConfigError (Base)
    └── ConfigValidationError
"""

from .fs_exceptions import (
    FileSystemException,
    NotFoundError,
    AlreadyExistsError,
    PermissionDeniedError,
    DirectoryNotEmptyError,
    InvalidPathError,
    IsADirectoryError,
    NotADirectoryError,
)

from .config_exceptions import (
    ConfigError,
    ConfigValidationError,
)

__all__ = [
    # Filesystem exceptions
    "FileSystemException",
    "NotFoundError",
    "AlreadyExistsError",
    "PermissionDeniedError",
    "DirectoryNotEmptyError",
    "InvalidPathError",
    "IsADirectoryError",
    "NotADirectoryError",
    # Configuration exceptions
    "ConfigError",
    "ConfigValidationError",
]
