"""Confidence gate deciding whether a ranked answer needs external validation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from domain.entities import Confidence, GateDecision, ScoredCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GateThresholds:
    min_score: float = 0.10
    gap: float = 0.05


DEFAULT_THRESHOLDS = GateThresholds()


def classify(
    best: ScoredCandidate,
    second: ScoredCandidate | None = None,
    thresholds: GateThresholds = DEFAULT_THRESHOLDS,
) -> Confidence:
    """Classify the top of a ranking as confident, low or ambiguous."""
    if best.score < thresholds.min_score:
        return Confidence.LOW
    if second is not None and abs(best.score - second.score) < thresholds.gap:
        return Confidence.AMBIGUOUS
    return Confidence.CONFIDENT


class ConfidenceGate:
    """Applies :func:`classify` to a ranked candidate list."""

    def __init__(self, thresholds: GateThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def decide(self, candidates: Sequence[ScoredCandidate]) -> GateDecision | None:
        if not candidates:
            return None
        best = candidates[0]
        second = candidates[1] if len(candidates) > 1 else None
        confidence = classify(best, second, self.thresholds)
        logger.debug(
            "Gate: best=%s score=%.4f second=%s confidence=%s",
            best.id,
            best.score,
            f"{second.score:.4f}" if second is not None else None,
            confidence.value,
        )
        return GateDecision(confidence=confidence, best=best, second=second)


__all__ = ["GateThresholds", "DEFAULT_THRESHOLDS", "classify", "ConfidenceGate"]
