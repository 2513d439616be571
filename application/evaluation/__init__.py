from application.evaluation.baselines import BM25Baseline
from application.evaluation.metrics import aggregate_mean, hit_at_k, reciprocal_rank
from application.evaluation.models import CaseResult, EvalCase, EvalRun
from application.evaluation.runner import run_evaluation

__all__ = [
    "EvalCase",
    "CaseResult",
    "EvalRun",
    "hit_at_k",
    "reciprocal_rank",
    "aggregate_mean",
    "run_evaluation",
    "BM25Baseline",
]
