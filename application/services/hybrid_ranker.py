"""Hybrid ranking of corpus entries: cosine similarity blended with IDF keyword overlap."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from application.services.corpus_statistics import corpus_fingerprint, entry_tokens, idf_weights
from application.services.similarity import cosine_similarity, keyword_overlap_score
from application.services.text import tokenize
from domain.entities import CorpusEntry, CorpusStatistics, ScoredCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RankingWeights:
    """Blend weights for the hybrid score.

    Short queries (up to ``short_query_tokens`` tokens) carry little lexical
    signal, so the semantic part gets a larger share.
    """

    short_semantic: float = 0.70
    short_keyword: float = 0.30
    long_semantic: float = 0.65
    long_keyword: float = 0.35
    overlap_bonus: float = 0.05
    short_query_tokens: int = 2

    def for_query(self, token_count: int) -> tuple[float, float]:
        if token_count <= self.short_query_tokens:
            return self.short_semantic, self.short_keyword
        return self.long_semantic, self.long_keyword


DEFAULT_WEIGHTS = RankingWeights()


def rank(
    query_vector: Sequence[float] | None,
    corpus: Sequence[CorpusEntry],
    statistics: CorpusStatistics,
    query_text: str,
    limit: int = 5,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> list[ScoredCandidate]:
    """Score every entry that has an embedding and return the best ``limit``.

    With an empty ``query_vector`` the ranking degrades to keyword overlap
    only; entries without vectors are omitted in both modes. Entries sharing
    an intent are collapsed to their best-scoring variant.
    """
    if statistics.fingerprint and statistics.fingerprint != corpus_fingerprint(corpus):
        raise ValueError("Corpus statistics were built from a different corpus snapshot")
    if limit <= 0:
        return []

    query_tokens = tokenize(query_text)
    idf = idf_weights(statistics, query_tokens)
    keyword_only = not query_vector
    if keyword_only:
        semantic_weight, keyword_weight = 0.0, 1.0
    else:
        semantic_weight, keyword_weight = weights.for_query(len(query_tokens))
    query_set = set(query_tokens)

    scored: list[ScoredCandidate] = []
    for position, entry in enumerate(corpus):
        if not entry.has_vector:
            logger.debug("Entry %s has no embedding, omitted from ranking", entry.id)
            continue
        tokens = entry_tokens(entry)
        semantic = 0.0 if keyword_only else cosine_similarity(query_vector, entry.vector)
        keyword = keyword_overlap_score(query_tokens, tokens, idf)
        score = semantic * semantic_weight + keyword * keyword_weight
        if query_set.intersection(tokens):
            score += weights.overlap_bonus
        scored.append(
            ScoredCandidate(
                entry=entry,
                score=score,
                semantic=semantic,
                keyword=keyword,
                position=position,
            )
        )

    collapsed = collapse_intents(scored)
    ranked = sorted(collapsed, key=lambda candidate: (-candidate.score, candidate.position))
    logger.debug(
        "Ranked %d of %d entries (keyword_only=%s, tokens=%d)",
        len(ranked),
        len(corpus),
        keyword_only,
        len(query_tokens),
    )
    return ranked[:limit]


def collapse_intents(candidates: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Keep only the best-scoring candidate per intent label.

    Candidates without an intent pass through unchanged. On equal scores the
    earlier corpus entry wins.
    """
    best_by_intent: dict[str, ScoredCandidate] = {}
    for candidate in candidates:
        intent = candidate.intent
        if not intent:
            continue
        current = best_by_intent.get(intent)
        if current is None or candidate.score > current.score:
            best_by_intent[intent] = candidate
    return [
        candidate
        for candidate in candidates
        if not candidate.intent or best_by_intent[candidate.intent] is candidate
    ]


__all__ = ["RankingWeights", "DEFAULT_WEIGHTS", "rank", "collapse_intents"]
