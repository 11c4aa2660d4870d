"""Core components for tokenum."""

from .models import (
    Config,
    MaxSize,
    Classification,
    ClassificationKind,
    NodeKind,
    Aggregate,
    TreeNode,
)
from .errors import (
    TokenumError,
    ParameterError,
    ParseSizeError,
    FileNotExistError,
    DirNotExistError,
    ReadFileError,
    ReadDirError,
    TokenizerError,
)
from .tokenizer import TokenCounter, make_tokenizer

__all__ = [
    "Config",
    "MaxSize",
    "Classification",
    "ClassificationKind",
    "NodeKind",
    "Aggregate",
    "TreeNode",
    "TokenumError",
    "ParameterError",
    "ParseSizeError",
    "FileNotExistError",
    "DirNotExistError",
    "ReadFileError",
    "ReadDirError",
    "TokenizerError",
    "TokenCounter",
    "make_tokenizer",
]
