"""Локальная правка опечаток по словарю корпуса, без обращения к LLM."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from application.services.text import tokenize
from domain.entities import CorpusEntry

logger = logging.getLogger(__name__)

MIN_VOCABULARY_WORD = 3
MIN_SPLIT_PART = 3
MIN_FIXABLE_WORD = 5
MAX_DISTANCE_RATIO = 0.4

_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\ufeff]")
_EMOJI_RE = re.compile("[\U0001f300-\U0001faff]")
_DOUBLE_QUOTES_RE = re.compile("[\u201c\u201d\u201e]")
_SINGLE_QUOTES_RE = re.compile("[\u2018\u2019]")
_LETTERS_RE = re.compile(r"[a-z]+")


@dataclass(frozen=True, slots=True)
class Vocabulary:
    """Words of the corpus keywords and questions, in first-seen order."""

    words: tuple[str, ...] = ()
    _lookup: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lookup", frozenset(self.words))

    def __contains__(self, word: object) -> bool:
        return word in self._lookup

    def __bool__(self) -> bool:
        return bool(self.words)


def build_vocabulary(entries: Iterable[CorpusEntry]) -> Vocabulary:
    seen: dict[str, None] = {}
    for entry in entries:
        for token in tokenize(f"{entry.keyword or ''} {entry.question}"):
            if len(token) >= MIN_VOCABULARY_WORD:
                seen.setdefault(token, None)
    return Vocabulary(words=tuple(seen))


def pre_clean(text: str | None) -> str:
    """Drop zero-width characters and emoji, straighten quotes, collapse spaces."""
    if not text:
        return ""
    text = _ZERO_WIDTH_RE.sub("", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _EMOJI_RE.sub("", text)
    return " ".join(text.split())


def _split_word(word: str, vocabulary: Vocabulary) -> str:
    lower = word.lower()
    if lower in vocabulary:
        return word
    for cut in range(MIN_SPLIT_PART, len(lower) - MIN_SPLIT_PART + 1):
        left, right = lower[:cut], lower[cut:]
        if left in vocabulary and right in vocabulary:
            return f"{left} {right}"
    return word


def split_merged_words(text: str, vocabulary: Vocabulary) -> str:
    """Split words like "hostelstudents" into two known words."""
    if not vocabulary:
        return text
    return " ".join(_split_word(word, vocabulary) for word in text.split())


def _fix_word(word: str, vocabulary: Vocabulary) -> str:
    lower = word.lower()
    if len(lower) < MIN_FIXABLE_WORD or not _LETTERS_RE.fullmatch(lower) or lower in vocabulary:
        return word
    max_distance = max(1, round(len(lower) * MAX_DISTANCE_RATIO))
    best = process.extractOne(lower, vocabulary.words, scorer=Levenshtein.distance, score_cutoff=max_distance)
    if best is None:
        return word
    fixed = best[0]
    if word[0].isupper():
        fixed = fixed.capitalize()
    return fixed


def local_spell_fix(text: str, vocabulary: Vocabulary) -> str:
    """Replace unknown words of five or more letters with the nearest vocabulary word.

    Shorter words are left alone ("text" must not turn into "test").
    """
    if not vocabulary:
        return text
    return " ".join(_fix_word(word, vocabulary) for word in text.split())


def fix_spelling(text: str | None, vocabulary: Vocabulary) -> str:
    cleaned = pre_clean(text)
    fixed = local_spell_fix(split_merged_words(cleaned, vocabulary), vocabulary)
    if fixed != cleaned:
        logger.debug("Local spelling fix %r -> %r", cleaned, fixed)
    return fixed


__all__ = [
    "Vocabulary",
    "build_vocabulary",
    "pre_clean",
    "split_merged_words",
    "local_spell_fix",
    "fix_spelling",
]
