"""Abstract interfaces for the FAQ retrieval engine."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from domain.entities import CorpusEntry, Query


class Embedder(ABC):
    """Turns text into vector embeddings.

    Implementations return an empty list when no embedding is available
    (missing credentials, network failure, timeout).
    """

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Return the stable identifier for this embedding model."""

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed a single text; empty list means "unavailable"."""

    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed several texts one by one."""
        return [self.embed(text) for text in texts]


class MeaningValidator(ABC):
    """Decides whether two questions ask the same thing."""

    @abstractmethod
    def validate_same_meaning(self, query_text: str, candidate_text: str) -> bool:
        """Return True only on a positive answer; False on any failure."""


class QueryRewriter(ABC):
    """Cleans up a raw user query before retrieval."""

    @abstractmethod
    def rewrite(self, query: Query) -> Query:
        """Return the rewritten query."""


class CorpusRepository(ABC):
    """Source of corpus snapshots."""

    @abstractmethod
    def load(self) -> list[CorpusEntry]:
        """Return all entries of the current snapshot, in declaration order."""

    @abstractmethod
    def fingerprint(self) -> str:
        """Return a value that changes whenever the snapshot changes."""


__all__ = [
    "Embedder",
    "MeaningValidator",
    "QueryRewriter",
    "CorpusRepository",
]
