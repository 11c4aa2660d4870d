"""
Validation of command line parameters.

All inputs are checked here, before any token is computed, so a bad
argument never leaves partial output behind.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import DirNotExistError, FileNotExistError, ParameterError
from .models import Config, MaxSize
from .tokenizer import SUPPORTED_ENCODINGS
from ..utils.size import parse_max_size


@dataclass
class Parameters:
    """Validated parameters for one run."""

    files: Optional[List[Path]]
    string: Optional[str]
    path: Optional[Path]
    encoding: str
    max_size: MaxSize
    min_token: int = 0
    max_token: Optional[int] = None  # None means unlimited
    only_valid: bool = False


def parse_files(value: str) -> List[Path]:
    """Split a comma separated file list, checking every file exists."""
    files = []
    for item in value.split(','):
        path = Path(item)
        if not path.is_file():
            raise FileNotExistError(item)
        files.append(path)
    return files


def parse_directory(value: str) -> Path:
    """Check that ``value`` names an existing directory."""
    path = Path(value)
    if not path.is_dir():
        raise DirNotExistError(value)
    return path


def parse_encoding(value: str) -> str:
    """Check that ``value`` is one of the supported encodings."""
    if value not in SUPPORTED_ENCODINGS:
        supported = ", ".join(SUPPORTED_ENCODINGS)
        raise ParameterError(f"-e only support {supported}, not: {value}")
    return value


def validate_parameters(
    files: Optional[str] = None,
    string: Optional[str] = None,
    path: Optional[str] = None,
    encoding: Optional[str] = None,
    max_size: Optional[str] = None,
    min_token: Optional[int] = None,
    max_token: Optional[int] = None,
    only_valid: bool = False,
    config: Optional[Config] = None
) -> Parameters:
    """
    Turn raw command line values into :class:`Parameters`.

    Missing ``encoding`` and ``max_size`` values come from ``config``. The
    configured encoding is not checked here; the tokenizer falls back to its
    default for unknown names.

    Raises:
        ParameterError: Bad value or none of files/string/path given.
        FileNotExistError: A listed file is missing.
        DirNotExistError: The path is not a directory.
    """
    config = config or Config()

    size_limit = parse_max_size(max_size if max_size is not None else config.default_max_size)

    parameters = Parameters(
        files=parse_files(files) if files is not None else None,
        string=string,
        path=parse_directory(path) if path is not None else None,
        encoding=parse_encoding(encoding) if encoding is not None else config.default_encoding,
        max_size=size_limit,
        min_token=min_token or 0,
        max_token=max_token or None,
        only_valid=only_valid,
    )

    if parameters.files is None and parameters.string is None and parameters.path is None:
        raise ParameterError("must specify -f or -s or -p")

    return parameters
