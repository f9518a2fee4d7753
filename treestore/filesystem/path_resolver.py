"""
Path Resolver Module

Turns path strings into component lists and back. Components are taken
literally: ``.`` and ``..`` are ordinary names here.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import List, Sequence

from treestore.exceptions import InvalidPathError


SEPARATOR = '/'


@dataclass
class ParsedPath:
    """A path split into its non-empty components."""
    components: List[str]
    separator: str = SEPARATOR

    @property
    def is_root(self) -> bool:
        return not self.components

    @property
    def parent(self) -> List[str]:
        return self.components[:-1]

    @property
    def leaf(self) -> str:
        return self.components[-1]

    def __str__(self) -> str:
        return self.separator + self.separator.join(self.components)


class PathResolver:
    """
    Parses and builds tree store paths.

    Leading, trailing and repeated separators are tolerated; empty
    components are discarded.
    """

    def __init__(self, separator: str = SEPARATOR):
        self.separator = separator

    def parse(self, path: str) -> ParsedPath:
        """
        Parse a path into components without rejecting the root.

        Args:
            path: Path string to parse

        Returns:
            ParsedPath, possibly with no components
        """
        components = [c for c in path.split(self.separator) if c]
        return ParsedPath(components=components, separator=self.separator)

    def split(self, path: str) -> List[str]:
        """
        Split a path that must name at least one entry.

        Raises:
            InvalidPathError: If the path has no usable component
        """
        components = self.parse(path).components
        if not components:
            raise InvalidPathError(path, reason="no path components")
        return components

    def join(self, components: Sequence[str]) -> str:
        """Build an absolute path string from components."""
        return self.separator + self.separator.join(components)

    def validate_name(self, name: str) -> str:
        """
        Check that ``name`` can be used as a single path component.

        Raises:
            InvalidPathError: If the name is empty or contains a separator
        """
        if not name:
            raise InvalidPathError(name, reason="empty name")
        if self.separator in name:
            raise InvalidPathError(name, reason="name contains a separator")
        return name


_default_resolver = PathResolver()


def split_path(path: str) -> List[str]:
    """Split ``path`` on ``/`` using the default resolver."""
    return _default_resolver.split(path)
