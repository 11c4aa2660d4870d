"""
File filtering utilities for tokenum.

This module decides which entries of a directory walk are skipped: hidden
entries and anything matched by ``.gitignore``-style ignore files.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pathspec

from ..core.models import Config

logger = logging.getLogger(__name__)


def read_ignore_file(path: Path) -> List[str]:
    """Read the pattern lines of an ignore file, or nothing if unreadable."""
    try:
        return path.read_text(encoding='utf-8', errors='replace').splitlines()
    except OSError as e:
        logger.warning(f"Cannot read ignore file {path}: {e}")
        return []


class FileFilter:
    """
    Handles ignore rules for one walk.

    Ignore files are collected per directory as the walk descends; a pattern
    only applies to paths below the directory that holds its ignore file.
    """

    def __init__(self, root: Path, config: Optional[Config] = None):
        self.root = root
        self.config = config or Config()
        # (base directory, compiled patterns) for the current walk stack, outermost first
        self._specs: List[Tuple[Path, pathspec.PathSpec]] = []

        if self.config.use_ignore_files:
            exclude = root / '.git' / 'info' / 'exclude'
            if exclude.is_file():
                self._add_spec(root, read_ignore_file(exclude))
        # Repository-wide excludes stay loaded for the whole walk
        self._pinned = len(self._specs)

    def _add_spec(self, base: Path, lines: List[str]) -> None:
        patterns = [line for line in lines if line.strip()]
        if patterns:
            self._specs.append((base, pathspec.GitIgnoreSpec.from_lines(patterns)))
            logger.debug(f"Loaded {len(patterns)} ignore patterns for {base}")

    def load_directory(self, directory: Path) -> None:
        """Pick up the ignore files located directly in ``directory``."""
        if not self.config.use_ignore_files:
            return
        for name in self.config.ignore_file_names:
            ignore_path = directory / name
            if ignore_path.is_file():
                self._add_spec(directory, read_ignore_file(ignore_path))

    def unload_directory(self, directory: Path) -> None:
        """Drop the ignore files of ``directory`` once its subtree is walked."""
        while len(self._specs) > self._pinned and self._specs[-1][0] == directory:
            self._specs.pop()

    def is_hidden(self, name: str) -> bool:
        """Check if an entry name is hidden (starts with dot)."""
        return self.config.skip_hidden and name.startswith('.')

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """
        Check if ``path`` is ignored by the applicable ignore files.

        The deepest ignore file with a matching pattern decides, so a nested
        ``!pattern`` re-includes what an outer file ignores.

        Args:
            path: Absolute path of the entry.
            is_dir: Whether the entry is a directory (``dir/`` patterns).
        """
        for base, spec in reversed(self._specs):
            try:
                relative = path.relative_to(base)
            except ValueError:
                continue
            candidate = relative.as_posix()
            if is_dir:
                candidate += '/'
            result = spec.check_file(candidate)
            if result.include is not None:
                return result.include
        return False

    def should_skip(self, path: Path, is_dir: bool) -> bool:
        """Check all criteria for a walked entry."""
        return self.is_hidden(path.name) or self.is_ignored(path, is_dir)
