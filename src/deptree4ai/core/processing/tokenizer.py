from __future__ import annotations

"""
Token Counting Engine.

Estimates the token density of an assembled dependency context so users can
judge whether it fits a model window. Uses tiktoken BPE encodings and falls
back to a character-ratio heuristic when an encoding cannot be loaded
(tiktoken downloads its BPE tables on first use).
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

import tiktoken

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN_AVG = 4

_MODERN_ENCODING = "o200k_base"
_LEGACY_ENCODING = "cl100k_base"
_LEGACY_MARKERS = ("gpt-4-", "gpt-3.5", "legacy")

# -----------------------------------------------------------------------------
# STRATEGIES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):
    """Abstract base class for token counting algorithms."""

    @abstractmethod
    def count(self, text: str, model_id: str) -> int:
        """
        Calculate the token count for a given text segment.

        Args:
            text: Input string to be tokenized.
            model_id: Model identifier for encoding selection.

        Returns:
            int: Total token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """Character density estimation."""

    def count(self, text: str, model_id: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """BPE encoder from the tiktoken library."""

    def count(self, text: str, model_id: str) -> int:
        encoding_name = _MODERN_ENCODING
        if any(marker in model_id.lower() for marker in _LEGACY_MARKERS):
            encoding_name = _LEGACY_ENCODING

        try:
            encoding = tiktoken.get_encoding(encoding_name)
        except ValueError:
            logger.debug(f"Encoding '{encoding_name}' not found, falling back to {_LEGACY_ENCODING}.")
            encoding = tiktoken.get_encoding(_LEGACY_ENCODING)

        return len(encoding.encode(text, disallowed_special=()))

# -----------------------------------------------------------------------------
# SERVICE
# -----------------------------------------------------------------------------

class TokenizerService:
    """
    Routes counting to tiktoken, degrading to the heuristic on failure.
    """

    def __init__(self) -> None:
        self._tiktoken: Optional[TokenizerStrategy] = TiktokenStrategy()
        self._heuristic = HeuristicStrategy()

    def count(self, text: str, model_id: str) -> int:
        """
        Count tokens of a text for the given model.

        Args:
            text: Input text.
            model_id: Model identifier.

        Returns:
            int: Token count (0 for empty input).
        """
        if not text:
            return 0

        if self._tiktoken is not None:
            try:
                return self._tiktoken.count(text, model_id)
            except Exception as e:
                logger.warning(f"BPE tokenization failed ({e}). Using heuristic estimate.")

        return self._heuristic.count(text, model_id)


_SERVICE_INSTANCE = TokenizerService()


def count_tokens(text: str, model_id: str) -> int:
    """Count tokens using the shared service instance."""
    return _SERVICE_INSTANCE.count(text, model_id)
