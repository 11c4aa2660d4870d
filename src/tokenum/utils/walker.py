"""Ignore-aware directory walking."""

import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Tuple

from ..core.models import Config
from .file_filter import FileFilter

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """
    Lazily walks a directory tree in pre-order.

    Entries of a directory are yielded sorted by name, each directory before
    its contents. The root itself is not yielded. Symlinked directories are
    not followed.
    """

    def __init__(self, root: Path, config: Optional[Config] = None):
        self.root = root
        self.config = config or Config()
        self.file_filter = FileFilter(root, self.config)

    def __iter__(self) -> Iterator[Tuple[Path, bool]]:
        return self.walk()

    def walk(self) -> Iterator[Tuple[Path, bool]]:
        """Yield ``(path, is_directory)`` for every entry below the root."""
        yield from self._walk_directory(self.root)

    def _walk_directory(self, directory: Path) -> Iterator[Tuple[Path, bool]]:
        self.file_filter.load_directory(directory)
        try:
            yield from self._walk_entries(directory)
        finally:
            self.file_filter.unload_directory(directory)

    def _walk_entries(self, directory: Path) -> Iterator[Tuple[Path, bool]]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            # Unreadable directories are skipped, the rest of the walk goes on
            logger.warning(f"Cannot list directory {directory}: {e}")
            return

        for entry in entries:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file()
            except OSError as e:
                logger.warning(f"Cannot stat {path}: {e}")
                continue

            if not is_dir and not is_file:
                logger.debug(f"Skipping special entry {path}")
                continue

            if self.file_filter.should_skip(path, is_dir):
                logger.debug(f"Ignoring {path}")
                continue

            yield path, is_dir
            if is_dir:
                yield from self._walk_directory(path)


def walk(root: Path, config: Optional[Config] = None) -> Iterator[Tuple[Path, bool]]:
    """Convenience wrapper around :class:`DirectoryWalker`."""
    return DirectoryWalker(root, config).walk()
