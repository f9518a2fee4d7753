"""
Tree Store Module

The in-memory hierarchical namespace:
- One root directory owning the whole tree
- Path resolution through directory nodes only
- Create, delete, rename, copy and write operations
- Tag and MIME type search

Author: YSNRFD
Version: 1.0.0
"""

import copy
import mimetypes
import threading
from typing import Optional, Any, Callable, Iterable, Iterator, List, Tuple, Union

from .metadata import Metadata, Permissions
from .node import File, Directory, Node, as_bytes
from .path_resolver import PathResolver
from treestore.core.config_loader import Config, FilesystemConfig, SearchConfig, get_config
from treestore.exceptions import (
    FileSystemException,
    NotFoundError,
    AlreadyExistsError,
    PermissionDeniedError,
    DirectoryNotEmptyError,
    IsADirectoryError,
    NotADirectoryError,
)
from treestore.logger import get_logger


WalkEntry = Tuple[str, List[str], List[str]]


class TreeStore:
    """
    In-memory tree of files and directories.

    Every operation resolves its path from the root, following directory
    nodes only, and then performs a single lookup or mutation. Failed
    operations raise a ``FileSystemException`` subclass and leave the tree
    untouched.

    All public methods hold one re-entrant lock, so a store may be shared
    between threads.

    Example:
        >>> store = TreeStore()
        >>> store.create('/docs', is_directory=True)
        >>> store.create('/docs/readme.txt', content=b'hello')
        >>> store.read_file('/docs/readme.txt')
        b'hello'
    """

    def __init__(self, config: Optional[Union[Config, FilesystemConfig]] = None):
        if config is None:
            config = get_config()

        if isinstance(config, Config):
            fs_config, search_config = config.filesystem, config.search
        else:
            fs_config, search_config = config, get_config().search

        self._config: FilesystemConfig = copy.deepcopy(fs_config)
        self._search_config: SearchConfig = copy.deepcopy(search_config)
        self._resolver = PathResolver(self._config.separator)
        self._lock = threading.RLock()
        self._logger = get_logger('store')

        root_metadata = Metadata.default(
            self._config,
            mime_type=self._config.directory_mime_type
        )
        self._root = Directory(name=self._config.root_name, metadata=root_metadata)

        self._logger.debug(
            "Tree store initialized",
            context={'root': self._root.name, 'owner': root_metadata.owner}
        )

    @property
    def config(self) -> FilesystemConfig:
        return self._config

    # Resolution primitives

    def _resolve_directory(self, components: Iterable[str], path: str) -> Directory:
        """
        Walk ``components`` from the root through directory nodes.

        Args:
            components: Path components naming a directory
            path: Original path, used in error reports

        Returns:
            The stored directory (not a copy)

        Raises:
            NotFoundError: If a component does not exist
            NotADirectoryError: If a component is a file
        """
        current = self._root

        for component in components:
            child = current.get(component)
            # Missing or file component ends the walk
            if child is None:
                raise NotFoundError(path, component=component)
            if not child.is_directory:
                raise NotADirectoryError(path, component=component)
            current = child

        return current

    def _resolve_entry(self, path: str) -> Tuple[Directory, str]:
        """
        Resolve the parent directory of ``path`` and return it with the leaf
        name. The leaf itself is not looked up.

        Raises:
            InvalidPathError: If the path has no components
        """
        components = self._resolver.split(path)
        parent = self._resolve_directory(components[:-1], path)
        return parent, components[-1]

    def _lookup(self, path: str) -> Node:
        parent, name = self._resolve_entry(path)
        node = parent.get(name)
        if node is None:
            raise NotFoundError(path, component=name)
        return node

    def _lookup_file(self, path: str) -> File:
        node = self._lookup(path)
        if node.is_directory:
            raise IsADirectoryError(path)
        return node

    def _guess_mime_type(self, name: str) -> Optional[str]:
        if not self._config.guess_mime_type:
            return None
        guessed, _ = mimetypes.guess_type(name, strict=False)
        return guessed

    # Mutating operations

    def create(
        self,
        path: str,
        content: Optional[bytes] = None,
        is_directory: bool = False,
        mime_type: Optional[str] = None,
        tags: Optional[Iterable[str]] = None
    ) -> None:
        """
        Create a file or directory.

        Args:
            path: Path of the new node; its parent must already exist
            content: Initial file content (ignored for directories)
            is_directory: Create a directory instead of a file
            mime_type: MIME type to record instead of the default
            tags: Initial tags

        Raises:
            InvalidPathError: If the path has no components
            NotFoundError: If the parent directory does not exist
            NotADirectoryError: If a parent component is a file
            AlreadyExistsError: If the name is taken in the parent
            TypeError: If ``content`` is not bytes-like
        """
        with self._lock:
            parent, name = self._resolve_entry(path)

            # Check if already exists
            if parent.contains(name):
                raise AlreadyExistsError(path)

            if is_directory:
                metadata = Metadata.default(
                    self._config,
                    mime_type=mime_type or self._config.directory_mime_type
                )
                node: Node = Directory(name=name, metadata=metadata)
            else:
                metadata = Metadata.default(
                    self._config,
                    mime_type=mime_type or self._guess_mime_type(name)
                )
                data = as_bytes(content) if content is not None else b''
                node = File(name=name, metadata=metadata, content=data)
                if self._config.track_size:
                    metadata.size = len(node.content)

            # Apply initial tags
            for tag in tags or ():
                metadata.add_tag(tag)

            parent.add(node)

        self._logger.debug(
            "Created directory" if is_directory else "Created file",
            context={'path': path, 'mime_type': metadata.mime_type}
        )

    def delete(self, path: str) -> None:
        """
        Delete a file or an empty directory.

        Raises:
            InvalidPathError: If the path has no components
            NotFoundError: If the entry does not exist
            DirectoryNotEmptyError: If the directory still has children
        """
        with self._lock:
            parent, name = self._resolve_entry(path)
            node = parent.get(name)

            if node is None:
                raise NotFoundError(path, component=name)

            if node.is_directory and not node.is_empty():
                raise DirectoryNotEmptyError(path, entries=len(node.children))

            # Remove from parent
            parent.remove(name)

        self._logger.debug("Deleted", context={'path': path})

    def rename(self, old_path: str, new_name: str) -> None:
        """
        Rename an entry within its parent directory.

        Args:
            old_path: Path of the entry to rename
            new_name: New name (a single component)

        Raises:
            InvalidPathError: If the path is empty or ``new_name`` is not a
                valid component
            NotFoundError: If the entry does not exist
            AlreadyExistsError: If ``new_name`` is taken in the parent
        """
        with self._lock:
            self._resolver.validate_name(new_name)
            parent, old_name = self._resolve_entry(old_path)

            if not parent.contains(old_name):
                raise NotFoundError(old_path, component=old_name)
            if parent.contains(new_name):
                raise AlreadyExistsError(
                    old_path,
                    context={'new_name': new_name}
                )

            # Re-key under the new name
            node = parent.remove(old_name)
            node.name = new_name
            node.metadata.touch_modified()
            parent.add(node)

        self._logger.debug(
            "Renamed",
            context={'path': old_path, 'new_name': new_name}
        )

    def copy(self, source_path: str, target_path: str) -> str:
        """
        Deep-copy an entry into another directory.

        The destination directory is ``target_path`` without its last
        component, and the copy keeps the *source's* name there. The last
        component of ``target_path`` does not rename the copy: copying
        ``/a/x`` to ``/b/y`` produces ``/b/x``.

        Args:
            source_path: Entry to copy (file or whole directory subtree)
            target_path: Path whose parent receives the copy

        Returns:
            Path of the new copy

        Raises:
            InvalidPathError: If either path has no components
            NotFoundError: If the source or the target parent is missing
            NotADirectoryError: If a target parent component is a file
            AlreadyExistsError: If the destination already holds the name
        """
        with self._lock:
            source_parent, source_name = self._resolve_entry(source_path)
            node = source_parent.get(source_name)
            if node is None:
                raise NotFoundError(source_path, component=source_name)

            # Destination is the parent of target_path
            target_components = self._resolver.split(target_path)[:-1]
            target_dir = self._resolve_directory(target_components, target_path)
            new_path = self._resolver.join(target_components + [source_name])

            if target_dir.contains(source_name):
                raise AlreadyExistsError(new_path, context={'source': source_path})

            target_dir.add(node.clone())

        self._logger.debug(
            "Copied",
            context={'source': source_path, 'target': new_path}
        )
        return new_path

    def write_file(self, path: str, content: bytes, append: bool = False) -> None:
        """
        Replace or append file content without checking permissions.

        Raises:
            NotFoundError: If the file does not exist
            IsADirectoryError: If the path names a directory
            TypeError: If ``content`` is not bytes-like
        """
        with self._lock:
            file = self._lookup_file(path)
            file.write(content, append=append, track_size=self._config.track_size)

        self._logger.debug(
            "Wrote file",
            context={'path': path, 'bytes': len(content), 'append': append}
        )

    def update_file(self, path: str, content: bytes, append: bool = False) -> None:
        """
        Replace or append file content if the file is writable.

        Same as ``write_file`` but refuses files whose write permission is
        cleared.

        Raises:
            NotFoundError: If the file does not exist
            IsADirectoryError: If the path names a directory
            PermissionDeniedError: If the write permission is not set
            TypeError: If ``content`` is not bytes-like
        """
        with self._lock:
            file = self._lookup_file(path)
            if not file.metadata.permissions.write:
                raise PermissionDeniedError(path, operation="write")
            file.write(content, append=append, track_size=self._config.track_size)

        self._logger.debug(
            "Updated file",
            context={'path': path, 'bytes': len(content), 'append': append}
        )

    def change_permissions(self, path: str, permissions: Union[Permissions, str]) -> None:
        """
        Overwrite the permission triple of an entry.

        Args:
            path: Entry to change
            permissions: New flags, or a string such as ``'r--'``
        """
        # Parse mode string
        if isinstance(permissions, str):
            permissions = Permissions.from_mode_string(permissions)

        with self._lock:
            node = self._lookup(path)
            node.metadata.permissions = copy.copy(permissions)
            node.metadata.touch_modified()

        self._logger.debug(
            "Changed permissions",
            context={'path': path, 'mode': permissions.to_mode_string()}
        )

    def add_tag(self, path: str, tag: str) -> bool:
        """
        Tag an entry.

        Returns:
            False if the tag was already present; the entry is then left
            unchanged

        Raises:
            NotFoundError: If the entry does not exist
        """
        with self._lock:
            node = self._lookup(path)
            added = node.metadata.add_tag(tag)
            if added:
                node.metadata.touch_modified()

        if added:
            self._logger.debug("Added tag", context={'path': path, 'tag': tag})
        return added

    def remove_tag(self, path: str, tag: str) -> bool:
        """Untag an entry. Returns False if the tag was not present."""
        with self._lock:
            node = self._lookup(path)
            removed = node.metadata.remove_tag(tag)
            if removed:
                node.metadata.touch_modified()

        if removed:
            self._logger.debug("Removed tag", context={'path': path, 'tag': tag})
        return removed

    def set_mime_type(self, path: str, mime_type: str) -> None:
        """
        Overwrite the MIME type of an entry.

        Raises:
            NotFoundError: If the entry does not exist
        """
        with self._lock:
            node = self._lookup(path)
            node.metadata.mime_type = mime_type
            node.metadata.touch_modified()

        self._logger.debug(
            "Set MIME type",
            context={'path': path, 'mime_type': mime_type}
        )

    # Queries

    def read_file(self, path: str) -> bytes:
        """
        Return the content of a file and record the access time.

        Raises:
            NotFoundError: If the file does not exist
            IsADirectoryError: If the path names a directory
        """
        with self._lock:
            file = self._lookup_file(path)
            if self._config.persist_access_time:
                file.metadata.touch_accessed()
            return file.content

    def list_directory(self, path: str) -> List[str]:
        """
        Names of the children of a directory; ``/`` lists the root.

        Raises:
            NotFoundError: If the directory does not exist
            NotADirectoryError: If the path names a file
        """
        components = self._resolver.parse(path).components
        with self._lock:
            return self._resolve_directory(components, path).names()

    def get_info(self, path: str) -> str:
        """Human-readable summary of an entry."""
        with self._lock:
            node = self._lookup(path)
            meta = node.metadata

            if node.is_directory:
                return (
                    f"Directory Name: {node.name}\n"
                    f"Size: {meta.size}\n"
                    f"Permissions: {meta.permissions!r}\n"
                    f"Owner: {meta.owner}"
                )

            return (
                f"File Name: {node.name}\n"
                f"Size: {meta.size}\n"
                f"Permissions: {meta.permissions!r}\n"
                f"Owner: {meta.owner}\n"
                f"MIME Type: {meta.mime_type}\n"
                f"Tags: {meta.tags!r}"
            )

    def get_metadata(self, path: str) -> Metadata:
        """Detached copy of an entry's metadata."""
        with self._lock:
            return copy.deepcopy(self._lookup(path).metadata)

    def exists(self, path: str) -> bool:
        components = self._resolver.parse(path).components
        if not components:
            return True
        with self._lock:
            try:
                self._lookup(path)
            except FileSystemException:
                return False
            return True

    def is_file(self, path: str) -> bool:
        with self._lock:
            try:
                return self._lookup(path).is_file
            except FileSystemException:
                return False

    def is_directory(self, path: str) -> bool:
        components = self._resolver.parse(path).components
        with self._lock:
            try:
                self._resolve_directory(components, path)
            except FileSystemException:
                return False
            return True

    def search_by_tag(self, tag: str, full_paths: Optional[bool] = None) -> List[str]:
        """
        Paths of all files carrying ``tag``, in depth-first order.

        By default each result is ``<parent-directory-name>/<file-name>``,
        so a file directly under the root is reported as ``//<file-name>``.
        Pass ``full_paths=True`` (or set ``search.full_paths``) for
        root-relative paths.
        """
        return self._search(lambda f: f.metadata.has_tag(tag), full_paths)

    def search_by_mime_type(self, mime_type: str, full_paths: Optional[bool] = None) -> List[str]:
        """Paths of all files whose MIME type equals ``mime_type``."""
        return self._search(lambda f: f.metadata.mime_type == mime_type, full_paths)

    def _search(self, predicate: Callable[[File], bool], full_paths: Optional[bool]) -> List[str]:
        if full_paths is None:
            full_paths = self._search_config.full_paths

        results: List[str] = []
        with self._lock:
            self._collect(predicate, full_paths, results)
        return results

    def _collect(
        self,
        predicate: Callable[[File], bool],
        full_paths: bool,
        results: List[str]
    ) -> None:
        """
        Append every matching file below the root to ``results``.

        Children are visited in insertion order and each subdirectory is
        finished before its next sibling, with an explicit stack of child
        iterators in place of recursion.
        """
        sep = self._resolver.separator
        stack: List[Tuple[Directory, List[str], Iterator[Node]]] = [
            (self._root, [], self._root.iter_children())
        ]

        while stack:
            directory, components, children = stack[-1]
            node = next(children, None)

            # Directory exhausted
            if node is None:
                stack.pop()
                continue

            if node.is_directory:
                stack.append((node, components + [node.name], node.iter_children()))
            elif predicate(node):
                if full_paths:
                    results.append(self._resolver.join(components + [node.name]))
                else:
                    results.append(f"{directory.name}{sep}{node.name}")

    def walk(self, path: str = '/') -> Iterator[WalkEntry]:
        """
        Depth-first listing of a subtree, like ``os.walk``.

        The listing is taken under the lock, so later changes to the tree do
        not show up in it.

        Returns:
            Iterator over ``(directory_path, directory_names, file_names)``
            tuples, the starting directory first
        """
        components = self._resolver.parse(path).components
        entries: List[WalkEntry] = []

        with self._lock:
            start = self._resolve_directory(components, path)
            stack: List[Tuple[List[str], Directory]] = [(components, start)]

            while stack:
                prefix, directory = stack.pop()
                dirs = [n.name for n in directory.iter_children() if n.is_directory]
                files = [n.name for n in directory.iter_children() if n.is_file]
                entries.append((self._resolver.join(prefix), dirs, files))
                # Reversed so the first child is popped first
                for name in reversed(dirs):
                    stack.append((prefix + [name], directory.get(name)))

        return iter(entries)

    def get_stats(self) -> dict[str, Any]:
        """Get tree statistics."""
        files = 0
        directories = 0
        total_bytes = 0

        with self._lock:
            stack: List[Directory] = [self._root]
            while stack:
                directory = stack.pop()
                for node in directory.iter_children():
                    if node.is_directory:
                        directories += 1
                        stack.append(node)
                    else:
                        files += 1
                        total_bytes += len(node.content)

        return {
            'files': files,
            'directories': directories,
            'total_bytes': total_bytes,
        }
