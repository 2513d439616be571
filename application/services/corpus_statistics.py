"""Document-frequency statistics used for IDF keyword weighting."""
from __future__ import annotations

import hashlib
import logging
from collections import Counter
from typing import Iterable, Sequence

from application.services.text import tokenize
from domain.entities import CorpusEntry, CorpusStatistics

logger = logging.getLogger(__name__)


def entry_tokens(entry: CorpusEntry) -> list[str]:
    """Tokens describing an entry: its keyword string, else its question."""
    return tokenize(entry.keyword or entry.question)


def corpus_fingerprint(entries: Sequence[CorpusEntry]) -> str:
    parts = [f"{entry.id}:{entry.keyword or ''}:{entry.question}" for entry in entries]
    return hashlib.sha1("|".join(sorted(parts)).encode("utf-8")).hexdigest()


def build_statistics(entries: Sequence[CorpusEntry]) -> CorpusStatistics:
    """Count in how many entries each token occurs.

    Entries without any token do not count towards ``total_documents``.
    """
    frequency: Counter[str] = Counter()
    total = 0
    for entry in entries:
        unique = set(entry_tokens(entry))
        if not unique:
            logger.debug("Entry %s has no tokens, skipped in statistics", entry.id)
            continue
        frequency.update(unique)
        total += 1
    return CorpusStatistics(
        document_frequency=dict(frequency),
        total_documents=total,
        fingerprint=corpus_fingerprint(entries),
    )


def idf_weights(statistics: CorpusStatistics, tokens: Iterable[str]) -> dict[str, float]:
    return {token: statistics.idf(token) for token in set(tokens)}


__all__ = ["build_statistics", "corpus_fingerprint", "entry_tokens", "idf_weights"]
