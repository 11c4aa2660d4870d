"""
Error types for tokenum.

Every error renders as a single descriptive line (``str(error)``) which the
CLI prints before exiting. None of them are retried.
"""

from typing import Optional


class TokenumError(Exception):
    """Base class for all tokenum errors."""


class ParameterError(TokenumError, ValueError):
    """A command line value is missing or not acceptable."""

    def __init__(self, para: str):
        self.para = para
        super().__init__(f"Error - {para}")


class ParseSizeError(ParameterError):
    """The numeric part of a size argument could not be parsed."""

    def __init__(self, value: str, cause: Optional[Exception] = None):
        self.value = value
        self.cause = cause
        detail = f"parse {value} -> u64"
        if cause is not None:
            detail += f": {cause}"
        super().__init__(detail)


class FileNotExistError(TokenumError):
    """A ``-f`` argument is not an existing regular file."""

    def __init__(self, file: str):
        self.file = file
        super().__init__(f"Error - {file} does not exist")


class DirNotExistError(TokenumError):
    """A ``-p`` argument is not an existing directory."""

    def __init__(self, dir: str):
        self.dir = dir
        super().__init__(f"Error - {dir} does not exist")


class ReadFileError(TokenumError):
    """Reading a file (or its metadata) failed."""

    def __init__(self, file: str, error: OSError):
        self.file = file
        self.error = error
        super().__init__(f"Error - fs::read {file}: {error}")


class ReadDirError(TokenumError):
    """Resolving or listing a directory failed."""

    def __init__(self, dir: str, error: OSError):
        self.dir = dir
        self.error = error
        super().__init__(f"Error - read_dir {dir}: {error}")


class TokenizerError(TokenumError):
    """The token encoding could not be initialized."""

    def __init__(self, tokenizer: str, error: Exception):
        self.tokenizer = tokenizer
        self.error = error
        super().__init__(f"Error - Initialize {tokenizer} tokenizer: {error}")
