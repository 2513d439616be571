from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class EvalCase:
    """A labelled query; ``expected_id=None`` means the bot should fall back."""

    query_text: str
    expected_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class CaseResult:
    case: EvalCase
    ranked_ids: list[str]
    scores: list[float] = field(default_factory=list)
    answered_id: str | None = None
    via: str | None = None
    metrics: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class EvalRun:
    name: str
    created_at: datetime
    case_results: list[CaseResult] = field(default_factory=list)
    aggregate_metrics: dict[str, float] = field(default_factory=dict)
