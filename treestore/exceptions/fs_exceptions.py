"""
Filesystem Exceptions

Exceptions raised by the tree store when a path cannot be resolved or an
operation would break one of the tree invariants.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all tree store errors.

    Attributes:
        message: Human-readable error description
        path: Path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path is not None:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path is not None:
            base = f"{base} (path={self.path})"
        return base


class NotFoundError(FileSystemException):
    """
    A path component does not exist.

    Raised both for a missing intermediate directory and for a missing
    final entry.

    Example:
        >>> raise NotFoundError("/docs/readme.txt", component="readme.txt")
    """

    def __init__(
        self,
        path: str,
        component: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if component:
            ctx["component"] = component
        super().__init__(
            message=f"File or directory not found: {path}",
            path=path,
            error_code=4001,
            context=ctx
        )
        self.component = component


class AlreadyExistsError(FileSystemException):
    """
    A sibling with the requested name already exists.

    Example:
        >>> raise AlreadyExistsError("/docs")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File or directory already exists: {path}",
            path=path,
            error_code=4002,
            context=context
        )


class PermissionDeniedError(FileSystemException):
    """
    The node's permission bits forbid the operation.

    Example:
        >>> raise PermissionDeniedError("/docs/readme.txt", operation="write")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(
            message=f"Permission denied: {path}",
            path=path,
            error_code=4003,
            context=ctx
        )
        self.operation = operation


class DirectoryNotEmptyError(FileSystemException):
    """
    Directory still has children.

    Example:
        >>> raise DirectoryNotEmptyError("/docs", entries=1)
    """

    def __init__(
        self,
        path: str,
        entries: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if entries is not None:
            ctx["entries"] = entries
        super().__init__(
            message=f"Directory not empty: {path}",
            path=path,
            error_code=4004,
            context=ctx
        )
        self.entries = entries


class InvalidPathError(FileSystemException):
    """
    Path has no usable component, or a name is not a valid component.

    Example:
        >>> raise InvalidPathError("/", reason="no path components")
    """

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Invalid path: {path!r}",
            path=path,
            error_code=4006,
            context=ctx
        )
        self.reason = reason


class IsADirectoryError(FileSystemException):
    """
    A file operation was attempted on a directory.

    Example:
        >>> raise IsADirectoryError("/docs")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Is a directory: {path}",
            path=path,
            error_code=4008,
            context=context
        )


class NotADirectoryError(FileSystemException):
    """
    Path traversal or a directory operation hit a file.

    Example:
        >>> raise NotADirectoryError("/docs/readme.txt/x", component="readme.txt")
    """

    def __init__(
        self,
        path: str,
        component: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if component:
            ctx["component"] = component
        super().__init__(
            message=f"Not a directory: {path}",
            path=path,
            error_code=4009,
            context=ctx
        )
        self.component = component
