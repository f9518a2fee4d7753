"""
treestore Filesystem Module

Provides the in-memory tree:
- File and directory nodes with attached metadata
- Path parsing
- The tree store and its operations
"""

from .metadata import Metadata, Permissions
from .node import File, Directory, Node, NodeType
from .path_resolver import PathResolver, ParsedPath, split_path
from .tree_store import TreeStore

__all__ = [
    # Metadata
    'Metadata',
    'Permissions',
    # Nodes
    'File',
    'Directory',
    'Node',
    'NodeType',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    'split_path',
    # Store
    'TreeStore',
]
