"""
File analysis module for tokenum.

This module handles individual file processing including:
- Size limit checks
- Binary file detection
- Lossy UTF-8 decoding
- Annotation text for each classification
"""

import logging
import os
from typing import Optional, Tuple

from .errors import ReadFileError
from .models import Classification, ClassificationKind, Config, MaxSize
from ..utils.size import format_size

logger = logging.getLogger(__name__)

# Bytes at or below this value do not appear in text files
BINARY_BYTE_THRESHOLD = 0x08

REPLACEMENT_CHARACTER = '�'


class FileAnalyzer:
    """Classifies files and extracts their text content."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def is_binary(self, content: bytes) -> bool:
        """
        Control-byte heuristic for non-text data.

        Only the first ``binary_sample_size`` bytes are inspected.
        """
        sample = content[:self.config.binary_sample_size]
        return any(byte <= BINARY_BYTE_THRESHOLD for byte in sample)

    def classify(
        self,
        raw: bytes,
        size: int,
        max_size: MaxSize
    ) -> Tuple[Classification, Optional[str]]:
        """
        Classify raw file content.

        Args:
            raw: File content. Ignored when the file is oversized.
            size: Size of the file in bytes.
            max_size: Upper limit for files to be tokenized.

        Returns:
            Tuple of (classification, decoded_text). The text is only
            returned for VALID files; their token count is left at 0 for
            the caller to fill in.
        """
        if max_size.exceeded_by(size):
            return Classification(ClassificationKind.OVERSIZED, size), None

        if self.is_binary(raw):
            return Classification(ClassificationKind.BINARY, size), None

        text = raw.decode('utf-8', errors='replace')
        if not text:
            return Classification(ClassificationKind.EMPTY, size), None
        if REPLACEMENT_CHARACTER in text:
            return Classification(ClassificationKind.INVALID_ENCODING, size), None

        return Classification(ClassificationKind.VALID, size), text

    def classify_file(
        self,
        file_path: str,
        max_size: MaxSize
    ) -> Tuple[Classification, Optional[str]]:
        """
        Read and classify a file on disk.

        Oversized files are never opened.

        Raises:
            ReadFileError: If the file metadata or content cannot be read.
        """
        try:
            size = os.path.getsize(file_path)
        except OSError as e:
            raise ReadFileError(str(file_path), e) from e

        if max_size.exceeded_by(size):
            logger.debug(f"Skipping read of {file_path}: {size} bytes > {max_size.label}")
            return self.classify(b"", size, max_size)

        try:
            with open(file_path, 'rb') as f:
                raw = f.read()
        except OSError as e:
            raise ReadFileError(str(file_path), e) from e

        return self.classify(raw, size, max_size)


def describe(classification: Classification, max_size: MaxSize) -> str:
    """Render the annotation text shown next to a file."""
    size = format_size(classification.size)
    kind = classification.kind

    if kind is ClassificationKind.VALID:
        return f"{size}, {classification.token_count} tokens"
    if kind is ClassificationKind.EMPTY:
        return f"{size}, 0 token"
    if kind is ClassificationKind.INVALID_ENCODING:
        return f"{size}, contain invalid UTF-8"
    if kind is ClassificationKind.BINARY:
        return f"{size}, binary file"
    return f"{size}, file size {classification.size} bytes > {max_size.label}"
