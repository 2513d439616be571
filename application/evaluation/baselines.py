"""BM25 baseline с кэшированием, для сравнения с гибридным ранжированием."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rank_bm25 import BM25Okapi

from application.services.corpus_statistics import corpus_fingerprint, entry_tokens
from application.services.text import tokenize
from domain.entities import CorpusEntry, ScoredCandidate


@dataclass(slots=True)
class _State:
    index: BM25Okapi | None
    entries: tuple[CorpusEntry, ...]
    fingerprint: str


class BM25Baseline:
    """Ranks entries by BM25 over their keywords, rebuilding only when the corpus changes."""

    def __init__(self) -> None:
        self._state = _State(index=None, entries=(), fingerprint="")

    def update_entries(self, entries: Sequence[CorpusEntry]) -> None:
        fingerprint = corpus_fingerprint(entries)
        if fingerprint == self._state.fingerprint:
            return
        indexed = tuple(entry for entry in entries if entry_tokens(entry))
        if not indexed:
            self._state = _State(index=None, entries=(), fingerprint=fingerprint)
            return
        self._state = _State(
            index=BM25Okapi([entry_tokens(entry) for entry in indexed]),
            entries=indexed,
            fingerprint=fingerprint,
        )

    def rank(self, query_text: str, limit: int = 5) -> list[ScoredCandidate]:
        if self._state.index is None or limit <= 0:
            return []
        query_tokens = tokenize(query_text)
        if not query_tokens:
            return []
        values = self._state.index.get_scores(query_tokens)
        scored = [
            ScoredCandidate(entry=entry, score=float(score), keyword=float(score), position=position)
            for position, (entry, score) in enumerate(zip(self._state.entries, values))
        ]
        scored.sort(key=lambda candidate: (-candidate.score, candidate.position))
        return scored[:limit]


__all__ = ["BM25Baseline"]
