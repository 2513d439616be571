"""Кэш эмбеддингов запросов, ключ - нормализованный текст (с числами)."""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Sequence

from application.services.text import normalize_text
from domain.interfaces import Embedder

logger = logging.getLogger(__name__)


class EmbeddingCache:
    """Thread-safe mapping from normalized text to embedding vector.

    Empty vectors are never stored, so an unavailable embedder is asked again
    on the next request. When ``max_entries`` is exceeded the oldest entry is
    evicted.
    """

    def __init__(self, max_entries: int = 1024) -> None:
        self._max_entries = max_entries
        self._entries: OrderedDict[str, tuple[float, ...]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, text: str) -> tuple[float, ...] | None:
        return self._entries.get(normalize_text(text))

    def put(self, text: str, vector: Sequence[float]) -> None:
        if not vector:
            return
        key = normalize_text(text)
        if not key:
            return
        with self._lock:
            self._entries[key] = tuple(vector)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def embed(self, text: str, embedder: Embedder) -> tuple[float, ...]:
        """Return a cached vector or ask ``embedder`` and remember the result."""
        cached = self.get(text)
        if cached is not None:
            logger.debug("Embedding cache hit for %r", text)
            return cached
        vector = tuple(embedder.embed(text))
        self.put(text, vector)
        return vector

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


__all__ = ["EmbeddingCache"]
