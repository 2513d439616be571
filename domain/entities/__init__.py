"""Domain entities for the FAQ retrieval engine."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class CorpusEntry:
    """One retrievable FAQ record loaded from the corpus snapshot."""

    id: str
    question: str
    answer: str
    keyword: str | None = None
    intent: str | None = None
    vector: tuple[float, ...] = ()

    @property
    def has_vector(self) -> bool:
        return len(self.vector) > 0


@dataclass(frozen=True, slots=True)
class CorpusStatistics:
    """Document frequencies derived from a single corpus snapshot."""

    document_frequency: Mapping[str, int]
    total_documents: int
    fingerprint: str = ""

    def idf(self, token: str) -> float:
        """IDF weight; unseen tokens get the corpus maximum."""
        df = self.document_frequency.get(token, 0)
        return math.log((self.total_documents + 1) / (df + 1)) + 1


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    """Corpus entry paired with the score it received for one query."""

    entry: CorpusEntry
    score: float
    semantic: float = 0.0
    keyword: float = 0.0
    position: int = 0

    @property
    def id(self) -> str:
        return self.entry.id

    @property
    def question(self) -> str:
        return self.entry.question

    @property
    def answer(self) -> str:
        return self.entry.answer

    @property
    def intent(self) -> str | None:
        return self.entry.intent


@dataclass(slots=True)
class Query:
    """A user query issued to the system."""

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class QueryContext:
    """Per-request view of a query: raw text, tokens and optional embedding."""

    text: str
    tokens: tuple[str, ...]
    vector: tuple[float, ...] = ()

    @property
    def has_vector(self) -> bool:
        return len(self.vector) > 0


@dataclass(frozen=True, slots=True)
class NamedTarget:
    """Navigation target: a panorama label or a project title."""

    label: str
    kind: str = "pano"
    url: str | None = None


@dataclass(frozen=True, slots=True)
class TargetMatch:
    target: NamedTarget
    exact: bool = False


class Confidence(str, Enum):
    CONFIDENT = "confident"
    LOW = "low"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True, slots=True)
class GateDecision:
    """Outcome of the confidence gate for a ranked candidate list."""

    confidence: Confidence
    best: ScoredCandidate | None
    second: ScoredCandidate | None = None

    @property
    def needs_validation(self) -> bool:
        return self.confidence is not Confidence.CONFIDENT


@dataclass(slots=True)
class ChatAnswer:
    """Answer returned to the caller, tagged with the path that produced it."""

    answer: str
    via: str
    entry_id: str | None = None
    score: float | None = None


__all__ = [
    "CorpusEntry",
    "CorpusStatistics",
    "ScoredCandidate",
    "Query",
    "QueryContext",
    "NamedTarget",
    "TargetMatch",
    "Confidence",
    "GateDecision",
    "ChatAnswer",
]
