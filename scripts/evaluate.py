"""Сравнить гибридное ранжирование с BM25 на размеченных запросах."""
from __future__ import annotations

import argparse
import json
from pathlib import Path

from application.evaluation import BM25Baseline, EvalCase, run_evaluation
from application.services.hybrid_ranker import rank
from application.use_cases.answer_question import answer_question
from infrastructure.config import EngineConfig, build_default_container
from ui.logging_utils import setup_logging


def load_cases(path: Path) -> list[EvalCase]:
    """Read ``[{"query": ..., "expected_id": ... | null}]``."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    return [EvalCase(query_text=item["query"], expected_id=item.get("expected_id")) for item in payload]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("cases", help="JSON-файл с размеченными запросами")
    parser.add_argument("--top-k", type=int, default=5, help="Глубина ранжирования (по умолчанию: 5)")
    parser.add_argument("--no-answers", action="store_true", help="Не прогонять полный сценарий ответа.")
    return parser.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()
    container = build_default_container(EngineConfig.from_env())
    snapshot = container.corpus.snapshot()
    cases = load_cases(Path(args.cases))

    def hybrid_rank(text: str, limit: int):
        vector = container.cache.embed(text, container.embedder)
        return rank(vector, snapshot.entries, snapshot.statistics, text, limit=limit, weights=container.config.weights)

    def answer(text: str):
        return answer_question(
            text,
            corpus=snapshot,
            embedder=container.embedder,
            rewriter=container.rewriter,
            cache=container.cache,
            gate=container.gate,
            validator=container.validator,
            weights=container.config.weights,
            limit=container.config.top_k,
        )

    baseline = BM25Baseline()
    baseline.update_entries(snapshot.entries)

    runs = [
        run_evaluation(cases, hybrid_rank, answer_fn=None if args.no_answers else answer, top_k=args.top_k),
        run_evaluation(cases, baseline.rank, top_k=args.top_k, name="bm25"),
    ]
    for run in runs:
        print(f"== {run.name}")
        for key, value in run.aggregate_metrics.items():
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
