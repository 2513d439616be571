"""Use case that answers a question from the FAQ corpus or falls back."""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass

from application.services.confidence import ConfidenceGate
from application.services.corpus import CorpusSnapshot
from application.services.embedding_cache import EmbeddingCache
from application.services.hybrid_ranker import DEFAULT_WEIGHTS, RankingWeights, rank
from domain.entities import ChatAnswer, Confidence, Query
from domain.interfaces import Embedder, MeaningValidator, QueryRewriter

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = (
    "I don’t have that information in my data. Please visit https://montforticse.in/ "
    "or contact the school office for official details."
)

# Queries this short are treated as follow-ups to the previous one.
FOLLOW_UP_MAX_CHARS = 4


def fallback(via: str) -> ChatAnswer:
    return ChatAnswer(answer=FALLBACK_ANSWER, via=via)


@dataclass(slots=True)
class ChatSession:
    """Single-slot memory of the previous question."""

    last_query: str = ""

    def expand(self, question: str) -> str:
        """Prefix very short follow-ups with the previous question, then remember this one."""
        text = question.strip()
        expanded = text
        if self.last_query and len(text) <= FOLLOW_UP_MAX_CHARS:
            expanded = f"{self.last_query} {text}"
            logger.debug("Follow-up expanded to %r", expanded)
        self.last_query = text
        return expanded


class SessionStore:
    """Bounded map of session id to :class:`ChatSession`, least recently used dropped first."""

    def __init__(self, max_sessions: int = 1000) -> None:
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def expand(self, session_id: str, question: str) -> str:
        """Apply follow-up memory of ``session_id`` to ``question``."""
        with self._lock:
            session = self._sessions.pop(session_id, None) or ChatSession()
            self._sessions[session_id] = session
            while len(self._sessions) > self._max_sessions:
                self._sessions.popitem(last=False)
            return session.expand(question)


def answer_question(
    question: str,
    *,
    corpus: CorpusSnapshot,
    embedder: Embedder,
    rewriter: QueryRewriter,
    cache: EmbeddingCache,
    gate: ConfidenceGate,
    validator: MeaningValidator | None = None,
    weights: RankingWeights = DEFAULT_WEIGHTS,
    limit: int = 5,
) -> ChatAnswer:
    """Answer ``question`` with the best corpus entry.

    Confident matches are returned directly. Low or ambiguous matches are sent
    to ``validator`` and accepted only on a positive answer. Every other path
    returns :data:`FALLBACK_ANSWER` with a ``via`` tag naming the reason.
    """
    text = (question or "").strip()
    if not text:
        return fallback("empty-question")
    if corpus.is_empty:
        logger.warning("Corpus is empty, answering with fallback")
        return fallback("empty-corpus")

    try:
        rewritten = rewriter.rewrite(Query(text=text)).text.strip() or text
        vector = cache.embed(rewritten, embedder)
        if not vector:
            logger.warning("No embedding for %r, ranking by keywords only", rewritten)

        candidates = rank(vector, corpus.entries, corpus.statistics, rewritten, limit=limit, weights=weights)
        decision = gate.decide(candidates)
        if decision is None:
            return fallback("no-match" if vector else "no-embedding")

        best = decision.best
        if not decision.needs_validation:
            return ChatAnswer(
                answer=best.answer,
                via="semantic-match" if vector else "keyword-match",
                entry_id=best.id,
                score=best.score,
            )

        if validator is not None and validator.validate_same_meaning(rewritten, best.question):
            logger.debug("Validator confirmed %s for %r", best.id, rewritten)
            return ChatAnswer(answer=best.answer, via="llm-validated-match", entry_id=best.id, score=best.score)

        logger.debug("Uncertain match %s rejected (%s)", best.id, decision.confidence.value)
        return fallback("low-score" if decision.confidence is Confidence.LOW else "ambiguous")
    except Exception:
        logger.exception("Failed to answer question %r", text)
        return fallback("error")


__all__ = ["FALLBACK_ANSWER", "FOLLOW_UP_MAX_CHARS", "ChatSession", "SessionStore", "answer_question", "fallback"]
