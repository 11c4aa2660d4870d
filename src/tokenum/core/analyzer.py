"""Main token analyzer orchestrator."""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .file_analyzer import FileAnalyzer, describe
from .models import Config
from .params import Parameters
from .tokenizer import TokenCounter
from ..utils.tree_builder import build

logger = logging.getLogger(__name__)


class TokenAnalyzer:
    """Computes token counts for the files, string and path of one run."""

    def __init__(
        self,
        tokenizer: TokenCounter,
        parameters: Parameters,
        config: Optional[Config] = None,
        progress: bool = False
    ):
        self.tokenizer = tokenizer
        self.parameters = parameters
        self.config = config or Config()
        self.progress = progress
        self.file_analyzer = FileAnalyzer(self.config)

    def run(self) -> Iterator[str]:
        """
        Yield output blocks in order: file lines, the string line, the tree.

        Raises:
            ReadFileError: If a file cannot be read.
            ReadDirError: If the directory cannot be resolved.
        """
        params = self.parameters

        if params.files is not None:
            for file_path in params.files:
                line = self.analyze_file(file_path)
                if line is not None:
                    yield line

        if params.string is not None:
            yield self.analyze_string(params.string)

        if params.path is not None:
            yield self.analyze_directory(params.path)

    def analyze_file(self, file_path: Path) -> Optional[str]:
        """
        Report line for a single file.

        Returns:
            The line, or None if the file is filtered out
        """
        params = self.parameters
        classification, text = self.file_analyzer.classify_file(str(file_path), params.max_size)

        if classification.is_valid:
            classification.token_count = self.tokenizer.count(text)
            if not classification.in_token_range(params.min_token, params.max_token):
                logger.debug(f"Omitting {file_path}: {classification.token_count} tokens out of range")
                return None
        elif params.only_valid:
            return None

        return f"{file_path} ({describe(classification, params.max_size)})"

    def analyze_string(self, text: str) -> str:
        """Report line for the ``-s`` string."""
        return f"-s string: {self.tokenizer.count(text)} tokens"

    def analyze_directory(self, path: Path) -> str:
        """Rendered report tree for the ``-p`` directory."""
        params = self.parameters
        return build(
            path,
            self.tokenizer,
            params.max_size,
            min_token=params.min_token,
            max_token=params.max_token,
            only_valid=params.only_valid,
            config=self.config,
            progress=self.progress
        )
