from __future__ import annotations


def hit_at_k(ranked_ids: list[str], expected_id: str, k: int) -> float:
    if k <= 0:
        return 0.0
    return 1.0 if expected_id in ranked_ids[:k] else 0.0


def reciprocal_rank(ranked_ids: list[str], expected_id: str, k: int | None = None) -> float:
    top = ranked_ids if k is None else ranked_ids[:k]
    for rank, entry_id in enumerate(top, start=1):
        if entry_id == expected_id:
            return 1.0 / rank
    return 0.0


def aggregate_mean(metrics: list[dict[str, float]]) -> dict[str, float]:
    if not metrics:
        return {}
    keys = set().union(*(m.keys() for m in metrics))
    out: dict[str, float] = {}
    for key in sorted(keys):
        vals = [m[key] for m in metrics if key in m]
        out[key] = sum(vals) / len(vals) if vals else 0.0
    return out
