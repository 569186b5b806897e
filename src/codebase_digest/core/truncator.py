"""Whitespace-based context truncation."""

import logging

logger = logging.getLogger(__name__)


class ContextTruncator:
    """
    Caps context to a token budget using whitespace-delimited words.

    This is a cheap approximation that does not depend on the tokenizer;
    the exact count reported later may differ from the budget.
    """

    def __init__(self, max_tokens: int):
        self.max_tokens = max_tokens

    def truncate(self, context: str) -> str:
        tokens = context.split()
        if len(tokens) > self.max_tokens:
            logger.warning("Context truncated due to token limit.")
            return " ".join(tokens[:self.max_tokens])
        return context
