"""TreeNode construction and aggregation for directory reports."""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from ..core.errors import ReadDirError
from ..core.file_analyzer import FileAnalyzer, describe
from ..core.models import Classification, Config, MaxSize, NodeKind, TreeNode
from ..core.tokenizer import TokenCounter
from .path_utils import PathUtils
from .size import format_size
from .walker import DirectoryWalker

logger = logging.getLogger(__name__)


class FileTreeBuilder:
    """
    Builds the report tree one walked entry at a time.

    File results are filtered and rolled up into every ancestor directory as
    they arrive; :meth:`finalize` then writes the directory annotations.
    """

    def __init__(
        self,
        root_label: str,
        tokenizer: TokenCounter,
        max_size: MaxSize,
        min_token: int = 0,
        max_token: Optional[int] = None,
        only_valid: bool = False,
        file_analyzer: Optional[FileAnalyzer] = None
    ):
        self.root = TreeNode(label=root_label, kind=NodeKind.DIRECTORY)
        self.tokenizer = tokenizer
        self.max_size = max_size
        self.min_token = min_token
        self.max_token = max_token
        self.only_valid = only_valid
        self.file_analyzer = file_analyzer or FileAnalyzer()

    def ensure_directory(self, components: List[str]) -> TreeNode:
        """
        Find or create the chain of directory nodes for ``components``.

        Returns:
            The directory node of the last component (the root for an
            empty list)
        """
        current = self.root
        for part in components:
            child = current.child(part)
            if child is None:
                child = current.add_child(TreeNode(label=part, kind=NodeKind.DIRECTORY))
            current = child
        return current

    def add_file(self, components: List[str], classification: Classification) -> Optional[TreeNode]:
        """
        Apply the filtering and aggregation policy for one classified file.

        Args:
            components: Path components of the file relative to the root
            classification: Outcome for the file, with its token count

        Returns:
            The inserted file node, or None if the file is not displayed
        """
        parent = self.ensure_directory(components[:-1])

        if classification.is_valid:
            if not classification.in_token_range(self.min_token, self.max_token):
                logger.debug(
                    f"Omitting {PathUtils.join_path_components(components)}: "
                    f"{classification.token_count} tokens out of range"
                )
                return None
            self._aggregate(parent, classification.size, classification.token_count)
        else:
            if classification.aggregates_size:
                self._aggregate(parent, classification.size, 0)
            if self.only_valid:
                return None

        node = TreeNode(
            label=components[-1],
            kind=NodeKind.FILE,
            annotation=describe(classification, self.max_size)
        )
        return parent.add_child(node)

    def add_file_path(self, components: List[str], file_path: Path) -> Optional[TreeNode]:
        """Classify and tokenize a file on disk, then add it."""
        classification, text = self.file_analyzer.classify_file(str(file_path), self.max_size)
        if classification.is_valid:
            classification.token_count = self.tokenizer.count(text)
        return self.add_file(components, classification)

    @staticmethod
    def _aggregate(directory: TreeNode, size: int, tokens: int) -> None:
        """Add a file's contribution to ``directory`` and all its ancestors."""
        node = directory
        while node is not None:
            node.aggregate.total_size += size
            node.aggregate.total_tokens += tokens
            node = node.parent

    def finalize(self) -> TreeNode:
        """Write the aggregate annotation of every directory node."""
        for node in self.root.walk():
            if node.is_directory():
                node.annotation = format_directory_annotation(node)
        return self.root


def format_directory_annotation(node: TreeNode) -> str:
    """Annotation text carrying a directory's totals."""
    size = format_size(node.aggregate.total_size)
    tokens = node.aggregate.total_tokens
    if tokens == 0:
        return f"{size}, total 0 token"
    return f"{size}, total {tokens} tokens"


def build_tree(
    root_path: Path,
    tokenizer: TokenCounter,
    max_size: MaxSize,
    min_token: int = 0,
    max_token: Optional[int] = None,
    only_valid: bool = False,
    config: Optional[Config] = None,
    progress: bool = False
) -> TreeNode:
    """
    Walk ``root_path`` and build its aggregated report tree.

    Raises:
        ReadDirError: If the root cannot be resolved.
        ReadFileError: If a file cannot be read.
    """
    config = config or Config()
    try:
        root = PathUtils.canonicalize(root_path)
    except OSError as e:
        raise ReadDirError(str(root_path), e) from e

    builder = FileTreeBuilder(
        PathUtils.root_label(root),
        tokenizer,
        max_size,
        min_token=min_token,
        max_token=max_token,
        only_valid=only_valid,
        file_analyzer=FileAnalyzer(config)
    )

    entries = DirectoryWalker(root, config).walk()
    if progress:
        entries = tqdm(entries, desc="Scanning", unit=" entries", file=sys.stderr, leave=False)

    for path, is_dir in entries:
        components = PathUtils.relative_components(path, root)
        if is_dir:
            builder.ensure_directory(components)
        else:
            builder.add_file_path(components, path)

    logger.debug(f"Built tree for {root}: {builder.root.aggregate}")
    return builder.finalize()


def build(
    root_path: Path,
    tokenizer: TokenCounter,
    max_size: MaxSize,
    min_token: int = 0,
    max_token: Optional[int] = None,
    only_valid: bool = False,
    config: Optional[Config] = None,
    progress: bool = False
) -> str:
    """Walk ``root_path`` and return the rendered report."""
    tree = build_tree(
        root_path, tokenizer, max_size,
        min_token=min_token,
        max_token=max_token,
        only_valid=only_valid,
        config=config,
        progress=progress
    )
    return tree.render()
