"""LLM-powered spelling correction and meaning normalization of user queries."""
from __future__ import annotations

import logging
import re
from typing import Callable

from application.services.spelling import Vocabulary, fix_spelling, pre_clean
from domain.entities import Query
from domain.interfaces import QueryRewriter
from infrastructure.llm.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

SPELLING_INSTRUCTION = """
Correct ONLY simple spelling mistakes.
Do NOT guess complicated, unfamiliar, or unclear words.
Do NOT replace words with similar-sounding alternatives.
Do NOT change the meaning.
Return ONLY the corrected text.
"""

NORMALIZE_INSTRUCTION = """
Rewrite the user's message into a clear, complete question.
Fix grammar ONLY if all words are valid English.
Do NOT guess unclear or misspelled words.
Do NOT add new meaning.
Do NOT answer the question.
Return only the rewritten question.
"""

_NON_LETTER_RE = re.compile(r"[^a-zA-Z]")
MAX_WORD_LENGTH = 10
# An LLM spelling fix that loses more words than this is discarded.
MAX_DROPPED_WORDS = 3


def looks_corrupted(text: str) -> bool:
    """True when any word is very long or contains non-letters."""
    return any(len(word) > MAX_WORD_LENGTH or _NON_LETTER_RE.search(word) for word in text.split())


class GeminiQueryRewriter(QueryRewriter):
    """Fix spelling, then rewrite into a clear question.

    Spelling goes through the local corpus vocabulary first (merged words,
    near-miss typos), so it still works without an API key. Single words are
    never sent to the LLM and queries of up to ``min_normalize_words`` words
    are never rephrased, so category queries like "hostel" or
    "wifi available" reach the ranker without LLM changes.
    """

    def __init__(
        self,
        client: GeminiClient,
        min_normalize_words: int = 3,
        vocabulary: Callable[[], Vocabulary] | None = None,
    ) -> None:
        self._client = client
        self._min_normalize_words = min_normalize_words
        self._vocabulary = vocabulary

    def rewrite(self, query: Query) -> Query:
        text = query.text.strip()
        corrected = self.correct_spelling(text)
        normalized = self.normalize_meaning(corrected)
        if normalized != text:
            logger.debug("Rewrote %r -> %r", text, normalized)
        return Query(text=normalized, metadata={**query.metadata, "original": text})

    def correct_spelling(self, text: str) -> str:
        single_word = len(text.split()) == 1
        if self._vocabulary is not None:
            cleaned = fix_spelling(text, self._vocabulary())
        else:
            cleaned = pre_clean(text)
        if not cleaned:
            return cleaned
        if single_word or looks_corrupted(cleaned):
            return cleaned.lower()
        corrected = self._client.generate(cleaned, SPELLING_INSTRUCTION)
        if not corrected:
            return cleaned
        if len(corrected.split()) < len(cleaned.split()) - MAX_DROPPED_WORDS:
            logger.debug("Ignoring spelling fix that dropped words: %r -> %r", cleaned, corrected)
            return cleaned
        return corrected

    def normalize_meaning(self, text: str) -> str:
        cleaned = pre_clean(text)
        if not cleaned:
            return cleaned
        if len(cleaned.split()) < self._min_normalize_words or looks_corrupted(cleaned):
            return cleaned.lower()
        return self._client.generate(cleaned, NORMALIZE_INSTRUCTION) or cleaned


__all__ = ["GeminiQueryRewriter", "looks_corrupted"]
