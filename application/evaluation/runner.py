from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Sequence

from application.evaluation.metrics import aggregate_mean, hit_at_k, reciprocal_rank
from application.evaluation.models import CaseResult, EvalCase, EvalRun
from domain.entities import ChatAnswer, ScoredCandidate

RankCallable = Callable[[str, int], Sequence[ScoredCandidate]]
AnswerCallable = Callable[[str], ChatAnswer]


def run_evaluation(
    cases: Sequence[EvalCase],
    rank_fn: RankCallable,
    *,
    answer_fn: AnswerCallable | None = None,
    top_k: int = 5,
    name: str = "hybrid",
) -> EvalRun:
    """Score a ranking function (and optionally the full answer path) on labelled cases.

    Ranking metrics only cover cases with an expected entry. ``answer_accuracy``
    counts a case as correct when the answer came from the expected entry, or
    when a fallback was given for a case that expects one.
    """
    results: list[CaseResult] = []
    for case in cases:
        ranked = list(rank_fn(case.query_text, top_k))
        ranked_ids = [candidate.id for candidate in ranked]
        metrics: dict[str, float] = {}
        if case.expected_id is not None:
            metrics[f"hit@{top_k}"] = hit_at_k(ranked_ids, case.expected_id, top_k)
            metrics["hit@1"] = hit_at_k(ranked_ids, case.expected_id, 1)
            metrics[f"mrr@{top_k}"] = reciprocal_rank(ranked_ids, case.expected_id, top_k)

        answered_id = None
        via = None
        if answer_fn is not None:
            answer = answer_fn(case.query_text)
            answered_id, via = answer.entry_id, answer.via
            metrics["answer_accuracy"] = 1.0 if answered_id == case.expected_id else 0.0

        results.append(
            CaseResult(
                case=case,
                ranked_ids=ranked_ids,
                scores=[candidate.score for candidate in ranked],
                answered_id=answered_id,
                via=via,
                metrics=metrics,
            )
        )

    return EvalRun(
        name=name,
        created_at=datetime.now(timezone.utc),
        case_results=results,
        aggregate_metrics=aggregate_mean([result.metrics for result in results]),
    )
