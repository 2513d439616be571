"""Vector and token-overlap similarity primitives."""
from __future__ import annotations

from typing import Mapping, Sequence

import numpy as np


def cosine_similarity(a: Sequence[float] | None, b: Sequence[float] | None) -> float:
    """Cosine similarity over the common prefix of both vectors.

    Returns 0.0 for empty inputs or zero norms instead of raising.
    """
    if a is None or b is None:
        return 0.0
    length = min(len(a), len(b))
    if length == 0:
        return 0.0
    left = np.asarray(a[:length], dtype=np.float64)
    right = np.asarray(b[:length], dtype=np.float64)
    norm_left = float(np.linalg.norm(left))
    norm_right = float(np.linalg.norm(right))
    if norm_left == 0.0 or norm_right == 0.0:
        return 0.0
    return float(np.dot(left, right) / (norm_left * norm_right))


def keyword_overlap_score(
    user_tokens: Sequence[str],
    entry_tokens: Sequence[str],
    idf: Mapping[str, float] | None = None,
) -> float:
    """Share of the user's tokens found in the entry, optionally IDF weighted."""
    if not user_tokens or not entry_tokens:
        return 0.0
    entry_set = set(entry_tokens)
    if idf is None:
        matches = sum(1 for token in user_tokens if token in entry_set)
        return matches / len(user_tokens)

    unique = set(user_tokens)
    total = sum(idf.get(token, 0.0) for token in unique)
    if total <= 0:
        return 0.0
    found = sum(idf.get(token, 0.0) for token in unique if token in entry_set)
    return found / total


__all__ = ["cosine_similarity", "keyword_overlap_score"]
