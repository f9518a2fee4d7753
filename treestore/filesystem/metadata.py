"""
Metadata Module

The record attached to every node in the tree: timestamps, size,
permission triple, ownership and classification labels.

Author: YSNRFD
Version: 1.0.0
"""

import time
from dataclasses import dataclass, field
from typing import Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from treestore.core.config_loader import FilesystemConfig


@dataclass
class Permissions:
    """Read, write and execute flags of a node."""
    read: bool = True
    write: bool = True
    execute: bool = False

    def to_mode_string(self) -> str:
        """Render as ``rw-`` style string."""
        return (
            ('r' if self.read else '-') +
            ('w' if self.write else '-') +
            ('x' if self.execute else '-')
        )

    @classmethod
    def from_mode_string(cls, mode: str) -> 'Permissions':
        """Parse a ``rwx`` style string; any other character clears the bit."""
        if len(mode) != 3:
            raise ValueError(f"Invalid permission string: {mode!r}")
        return cls(read=mode[0] == 'r', write=mode[1] == 'w', execute=mode[2] == 'x')


@dataclass
class Metadata:
    """
    Metadata attached to a file or directory.

    ``is_read_only`` and ``is_hidden`` are informational: no store
    operation consults them.
    """

    created_at: float = field(default_factory=time.time)
    modified_at: float = field(default_factory=time.time)
    accessed_at: float = field(default_factory=time.time)
    size: int = 0
    permissions: Permissions = field(default_factory=Permissions)
    owner: str = "root"
    group: str = "root"
    is_read_only: bool = False
    is_hidden: bool = False
    mime_type: str = "text/plain"
    tags: List[str] = field(default_factory=list)

    @classmethod
    def default(
        cls,
        config: Optional['FilesystemConfig'] = None,
        mime_type: Optional[str] = None
    ) -> 'Metadata':
        """
        Build metadata for a freshly created node.

        Args:
            config: Source of the default owner, group and MIME type
            mime_type: Overrides the configured default MIME type

        Returns:
            Metadata with all three timestamps set to now
        """
        now = time.time()
        metadata = cls(created_at=now, modified_at=now, accessed_at=now)
        if config is not None:
            metadata.owner = config.default_owner
            metadata.group = config.default_group
            metadata.mime_type = config.default_mime_type
        if mime_type is not None:
            metadata.mime_type = mime_type
        return metadata

    def touch_accessed(self) -> None:
        self.accessed_at = time.time()

    def touch_modified(self) -> None:
        self.modified_at = time.time()

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def add_tag(self, tag: str) -> bool:
        """Add a tag; returns False if it was already present."""
        if tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, tag: str) -> bool:
        """Remove every occurrence of a tag; returns False if absent."""
        if tag not in self.tags:
            return False
        self.tags = [t for t in self.tags if t != tag]
        return True

    def to_dict(self) -> dict:
        """Convert metadata to a dictionary for display."""
        return {
            'size': self.size,
            'permissions': self.permissions.to_mode_string(),
            'owner': self.owner,
            'group': self.group,
            'mime_type': self.mime_type,
            'tags': list(self.tags),
            'hidden': self.is_hidden,
            'read_only': self.is_read_only,
            'created': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.created_at)),
            'modified': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.modified_at)),
            'accessed': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.accessed_at)),
        }
