"""
Token counting functionality for codebase-digest.

This module provides exact token counts of the final context using OpenAI's
tiktoken library. The encoder is loaded on first use, since tiktoken may
need to fetch the encoding file.
"""

import logging
from typing import Any, Optional

import tiktoken

logger = logging.getLogger(__name__)


class TokenCounter:
    """
    Handles token counting for text content.

    Errors from loading the encoding propagate to the caller unchanged.
    """

    def __init__(self, encoding_name: str = "o200k_base"):
        """
        Initialize the token counter.

        Args:
            encoding_name: The name of the tiktoken encoding to use.
                         Default is o200k_base (used by GPT-4o).
        """
        self.encoding_name = encoding_name
        self.encoder: Optional[Any] = None

    def _ensure_encoder(self) -> Any:
        if self.encoder is None:
            logger.debug(f"Loading token encoder '{self.encoding_name}'")
            self.encoder = tiktoken.get_encoding(self.encoding_name)
        return self.encoder

    def count(self, text: str) -> int:
        """
        Count tokens in the given text.

        Args:
            text: The text to count tokens for.

        Returns:
            Number of tokens.

        Raises:
            ValueError: If tiktoken does not know the encoding.
        """
        if not text:
            return 0
        encoder = self._ensure_encoder()
        # Context is source code; treat special-token lookalikes as plain text
        return len(encoder.encode(text, disallowed_special=()))
