"""Path utilities for tree construction."""

from pathlib import Path
from typing import List


class PathUtils:
    """Utilities for consistent path handling across platforms."""

    @staticmethod
    def canonicalize(path: Path) -> Path:
        """
        Resolve ``path`` to an absolute path with symlinks and ``..`` removed.

        Raises:
            OSError: If the path does not exist.
        """
        return Path(path).resolve(strict=True)

    @staticmethod
    def root_label(path: Path) -> str:
        """
        Display name of a tree root.

        This is the last path component, or the whole path when there is
        none (e.g. ``/``).
        """
        return path.name or str(path)

    @staticmethod
    def relative_components(path: Path, root: Path) -> List[str]:
        """
        Split ``path`` into components relative to ``root``.

        Args:
            path: Path below ``root``
            root: Base directory

        Returns:
            List of path components, empty for the root itself
        """
        return list(Path(path).relative_to(root).parts)

    @staticmethod
    def join_path_components(components: List[str]) -> str:
        """Join path components with forward slashes."""
        return '/'.join(components)
