from __future__ import annotations

"""
Token Counting Engine.

Estimates the size of the assembled content for the target model. OpenAI
style BPE counting is done locally with tiktoken; a character-density
heuristic takes over when an encoding cannot be loaded (offline machines
without a cached BPE file, for instance).
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, Optional

import tiktoken

from pastedeps.domain.constants import DEFAULT_MODEL

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

CHARS_PER_TOKEN_AVG = 4

_MODERN_ENCODING = "o200k_base"
_LEGACY_ENCODING = "cl100k_base"


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
            model_id: Model identifier used to select an encoding.

        Returns:
            int: Total token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """Fallback estimation: one token per four characters, rounded up."""

    def count(self, text: str, model_id: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """
    Local BPE encoder backed by tiktoken.

    Loaded encodings are cached per instance. An encoding that failed to
    load is remembered so the failure is not retried on every call.
    """

    def __init__(self) -> None:
        self._encodings: Dict[str, Optional["tiktoken.Encoding"]] = {}

    @staticmethod
    def encoding_name_for(model_id: str) -> str:
        """Pick the encoding family for a model identifier."""
        if any(x in model_id.lower() for x in ["gpt-4-", "gpt-3.5", "legacy"]):
            return _LEGACY_ENCODING
        return _MODERN_ENCODING

    def count(self, text: str, model_id: str) -> int:
        name = self.encoding_name_for(model_id)
        if name not in self._encodings:
            try:
                self._encodings[name] = tiktoken.get_encoding(name)
            except Exception as e:
                logger.debug(f"Encoding '{name}' unavailable: {e}")
                self._encodings[name] = None

        encoding = self._encodings[name]
        if encoding is None:
            raise RuntimeError(f"tiktoken encoding '{name}' could not be loaded")
        return len(encoding.encode(text, disallowed_special=()))


# -----------------------------------------------------------------------------
# SERVICE FACADE
# -----------------------------------------------------------------------------

class TokenizerService:
    """Routes counting to tiktoken and falls back to the heuristic on failure."""

    def __init__(self) -> None:
        self.heuristic = HeuristicStrategy()
        self.tiktoken = TiktokenStrategy()
        self._fallback_reported = False

    def count(self, text: str, model: str = DEFAULT_MODEL) -> int:
        """
        Count tokens for the target model.

        Args:
            text: Raw input text.
            model: Target model identifier.

        Returns:
            int: Token count, exact when tiktoken is usable, estimated otherwise.
        """
        if not text:
            return 0

        try:
            return self.tiktoken.count(text, model or DEFAULT_MODEL)
        except Exception as e:
            if not self._fallback_reported:
                logger.warning(f"Token counting via tiktoken failed: {e}. Using heuristic fallback.")
                self._fallback_reported = True
            return self.heuristic.count(text, model)


_SERVICE_INSTANCE = TokenizerService()


def count_tokens(text: str, model: str = DEFAULT_MODEL) -> int:
    """
    Estimate the number of tokens of a text for the target model.

    Delegates to the module-level TokenizerService instance.
    """
    return _SERVICE_INSTANCE.count(text, model)
