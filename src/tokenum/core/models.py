"""
Core data models for tokenum.

This module contains the fundamental data structures used throughout
the application: configuration, file classifications and the report tree.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


DEFAULT_ENCODING = "o200k_base"
DEFAULT_MAX_SIZE = "10m"


@dataclass
class Config:
    """Configuration settings for tokenum."""

    # Used when no -e value is given on the command line
    default_encoding: str = field(
        default_factory=lambda: os.getenv('TOKENUM_ENCODING', DEFAULT_ENCODING)
    )
    # Used when no -m value is given on the command line
    default_max_size: str = field(
        default_factory=lambda: os.getenv('TOKENUM_MAX_SIZE', DEFAULT_MAX_SIZE)
    )

    # Directory walk
    skip_hidden: bool = True
    use_ignore_files: bool = True
    ignore_file_names: Tuple[str, ...] = ('.gitignore', '.ignore')

    # Leading bytes inspected by the binary heuristic
    binary_sample_size: int = 50


@dataclass(frozen=True)
class MaxSize:
    """Upper file size limit for tokenization."""

    limit: Optional[int]  # None means unlimited
    label: str

    @property
    def unlimited(self) -> bool:
        return self.limit is None

    def exceeded_by(self, size: int) -> bool:
        """Check if a file of ``size`` bytes is over the limit."""
        return not self.unlimited and size > self.limit


class ClassificationKind(Enum):
    """Outcome of inspecting a single file."""
    VALID = "valid"
    EMPTY = "empty"
    BINARY = "binary"
    INVALID_ENCODING = "invalid_encoding"
    OVERSIZED = "oversized"


@dataclass
class Classification:
    """Classification of one visited file."""

    kind: ClassificationKind
    size: int
    token_count: int = 0

    @property
    def is_valid(self) -> bool:
        return self.kind is ClassificationKind.VALID

    @property
    def aggregates_size(self) -> bool:
        """Whether the file size is rolled up into ancestor directories.

        Empty files are deliberately left out, unlike the other non-valid
        classifications.
        """
        return self.kind is not ClassificationKind.EMPTY

    def in_token_range(self, min_token: int, max_token: Optional[int]) -> bool:
        """Check the token count against ``[min_token, max_token]``."""
        if self.token_count < min_token:
            return False
        return max_token is None or self.token_count <= max_token


class NodeKind(Enum):
    """Kind of a tree node."""
    DIRECTORY = "dir"
    FILE = "file"


@dataclass
class Aggregate:
    """Size and token totals accumulated for a directory."""

    total_size: int = 0
    total_tokens: int = 0


@dataclass
class TreeNode:
    """Represents a file or directory in the report tree."""

    label: str
    kind: NodeKind
    children: List['TreeNode'] = field(default_factory=list)
    annotation: Optional[str] = None
    aggregate: Aggregate = field(default_factory=Aggregate)
    parent: Optional['TreeNode'] = field(default=None, repr=False, compare=False)
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def is_file(self) -> bool:
        """Check if this node represents a file."""
        return self.kind is NodeKind.FILE

    def is_directory(self) -> bool:
        """Check if this node represents a directory."""
        return self.kind is NodeKind.DIRECTORY

    def child(self, label: str) -> Optional['TreeNode']:
        """Look up a direct child by label."""
        pos = self._index.get(label)
        return self.children[pos] if pos is not None else None

    def add_child(self, node: 'TreeNode') -> 'TreeNode':
        """Append ``node`` as the last child and return it."""
        if not self.is_directory():
            raise ValueError(f"Cannot add children to file node: {self.label}")
        node.parent = self
        self._index[node.label] = len(self.children)
        self.children.append(node)
        return node

    def ancestors(self):
        """Yield parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self):
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    @property
    def line(self) -> str:
        """Display line for this node."""
        if self.annotation is None:
            return self.label
        return f"{self.label} ({self.annotation})"

    def render(self) -> str:
        """Generate the indented tree representation rooted at this node."""
        lines = [self.line]

        def format_recursive(node: 'TreeNode', prefix: str):
            for i, child in enumerate(node.children):
                is_last = i == len(node.children) - 1
                connector = "└── " if is_last else "├── "
                lines.append(f"{prefix}{connector}{child.line}")
                if child.children:
                    extension = "    " if is_last else "│   "
                    format_recursive(child, prefix + extension)

        format_recursive(self, "")
        return "\n".join(lines)
