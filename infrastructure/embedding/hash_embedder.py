"""Deterministic hash-based embedder for demos and tests."""
from __future__ import annotations

import hashlib
import math

from application.services.text import tokenize
from domain.interfaces import Embedder


class HashEmbedder(Embedder):
    """Averages hashed word vectors, so texts sharing words point the same way."""

    def __init__(self, dimension: int = 32) -> None:
        self._dimension = dimension
        self._model_id = f"hash-words-{dimension}"

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def dimension(self) -> int:
        return self._dimension

    def _word_vector(self, word: str) -> list[float]:
        digest = hashlib.sha256(word.encode("utf-8")).digest()
        return [digest[i % len(digest)] / 255.0 - 0.5 for i in range(self._dimension)]

    def embed(self, text: str) -> list[float]:
        words = tokenize(text)
        if not words:
            return []
        vector = [0.0] * self._dimension
        for word in words:
            for idx, value in enumerate(self._word_vector(word)):
                vector[idx] += value
        norm = math.sqrt(sum(value * value for value in vector)) or 1.0
        return [value / norm for value in vector]


__all__ = ["HashEmbedder"]
