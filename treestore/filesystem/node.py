"""
Node Module

The two node variants of the tree. A ``Directory`` owns its children
outright; nothing points back up the tree.

Author: YSNRFD
Version: 1.0.0
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, List, Union, Iterator

from .metadata import Metadata


def as_bytes(data: Any) -> bytes:
    """
    Copy bytes-like content into an immutable ``bytes`` object.

    Raises:
        TypeError: If ``data`` is not bytes, bytearray or memoryview
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"File content must be bytes-like, not {type(data).__name__}")
    return bytes(data)


class NodeType(Enum):
    """Kinds of node."""
    FILE = 1
    DIRECTORY = 2


@dataclass
class File:
    """A named byte sequence."""

    name: str
    metadata: Metadata = field(default_factory=Metadata)
    content: bytes = b''

    node_type = NodeType.FILE

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def is_file(self) -> bool:
        return True

    def write(self, data: bytes, append: bool = False, track_size: bool = True) -> None:
        """
        Replace or extend the content.

        Args:
            data: Bytes to store
            append: Concatenate onto the existing content instead of replacing
            track_size: Recompute ``metadata.size`` from the new content
        """
        data = as_bytes(data)

        if append:
            self.content = self.content + data
        else:
            self.content = data
        if track_size:
            self.metadata.size = len(self.content)
        self.metadata.touch_modified()

    def clone(self) -> 'File':
        return copy.deepcopy(self)


@dataclass
class Directory:
    """
    A named mapping of child name to node.

    Child names are unique within a directory; every child's ``name`` equals
    its key.
    """

    name: str
    metadata: Metadata = field(default_factory=Metadata)
    children: dict[str, 'Node'] = field(default_factory=dict, repr=False)

    node_type = NodeType.DIRECTORY

    @property
    def is_directory(self) -> bool:
        return True

    @property
    def is_file(self) -> bool:
        return False

    def get(self, name: str) -> Optional['Node']:
        return self.children.get(name)

    def contains(self, name: str) -> bool:
        return name in self.children

    def add(self, node: 'Node') -> None:
        """Insert a child under its own name."""
        if node.name in self.children:
            raise ValueError(f"Duplicate entry: {node.name}")
        self.children[node.name] = node

    def remove(self, name: str) -> Optional['Node']:
        return self.children.pop(name, None)

    def names(self) -> List[str]:
        return list(self.children)

    def is_empty(self) -> bool:
        return not self.children

    def iter_children(self) -> Iterator['Node']:
        return iter(self.children.values())

    def clone(self) -> 'Directory':
        """
        Deep copy of this directory and everything below it.

        Walks the subtree with an explicit stack, not recursion.
        """
        root = Directory(name=self.name, metadata=copy.deepcopy(self.metadata))
        stack: List[tuple[Directory, Directory]] = [(self, root)]

        while stack:
            source, target = stack.pop()
            for child in source.iter_children():
                if child.is_directory:
                    new_dir = Directory(name=child.name, metadata=copy.deepcopy(child.metadata))
                    target.children[child.name] = new_dir
                    stack.append((child, new_dir))
                else:
                    target.children[child.name] = child.clone()

        return root


Node = Union[File, Directory]
