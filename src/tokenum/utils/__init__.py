"""Utility modules for tokenum."""

from .path_utils import PathUtils
from .size import format_size, parse_max_size
from .file_filter import FileFilter
from .walker import DirectoryWalker, walk

__all__ = ["PathUtils", "format_size", "parse_max_size", "FileFilter", "DirectoryWalker", "walk"]
