"""
Token counting functionality for tokenum.

This module wraps OpenAI's tiktoken encodings behind a small interface so the
rest of the application only needs ``count(text) -> int``.
"""

import logging
from typing import Any, Dict

import tiktoken

from .errors import TokenizerError
from .models import DEFAULT_ENCODING

logger = logging.getLogger(__name__)


# Encodings accepted on the command line, with the models that use them
SUPPORTED_ENCODINGS: Dict[str, str] = {
    "o200k_base": "GPT-4o models, o1 models",
    "cl100k_base": "ChatGPT models, text-embedding-ada-002",
    "p50k_base": "Code models, text-davinci-002, text-davinci-003",
    "p50k_edit": "edit models, text-davinci-edit-001, code-davinci-edit-001",
    "r50k_base": "GPT-3 models, davinci",
}

# Alternative names resolved by the adapter but not offered on the CLI
ENCODING_ALIASES: Dict[str, str] = {
    "gpt2": "r50k_base",
}


def resolve_encoding_name(name: str) -> str:
    """
    Map a scheme name to a tiktoken encoding name.

    Unknown names fall back to the default encoding instead of failing.
    """
    if name in SUPPORTED_ENCODINGS:
        return name
    if name in ENCODING_ALIASES:
        return ENCODING_ALIASES[name]
    logger.warning(f"Unknown encoding '{name}', falling back to {DEFAULT_ENCODING}")
    return DEFAULT_ENCODING


class TokenCounter:
    """Counts tokens for text content with a single tiktoken encoding."""

    def __init__(self, encoding_name: str, encoder: Any):
        self.encoding_name = encoding_name
        self.encoder = encoder

    def count(self, text: str) -> int:
        """
        Count tokens in the given text.

        Special tokens (e.g. ``<|endoftext|>``) are encoded as such and
        counted rather than rejected.
        """
        if not text:
            return 0
        return len(self.encoder.encode(text, allowed_special="all"))

    def __repr__(self) -> str:
        return f"TokenCounter({self.encoding_name!r})"


def make_tokenizer(scheme_name: str = DEFAULT_ENCODING) -> TokenCounter:
    """
    Build a token counter for ``scheme_name``.

    Raises:
        TokenizerError: If the encoding cannot be loaded.
    """
    encoding_name = resolve_encoding_name(scheme_name)
    try:
        encoder = tiktoken.get_encoding(encoding_name)
    except Exception as e:
        raise TokenizerError(encoding_name, e) from e
    logger.debug(f"Loaded token encoding {encoding_name}")
    return TokenCounter(encoding_name, encoder)
