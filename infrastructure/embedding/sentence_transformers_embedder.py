"""Локальный эмбеддер FAQ на базе sentence-transformers."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Sequence

from sentence_transformers import SentenceTransformer

from domain.interfaces import Embedder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SentenceTransformersConfig:
    model_name: str
    device: str = "cpu"
    normalize_embeddings: bool = True
    batch_size: int = 16


class SentenceTransformersEmbedder(Embedder):
    """Работает без API-ключа; модель загружается при первом запросе.

    Ошибки кодирования не пробрасываются: вместо вектора возвращается пустой
    список, и ранжирование переходит на ключевые слова.
    """

    def __init__(self, config: SentenceTransformersConfig) -> None:
        self._config = config
        self._model: SentenceTransformer | None = None
        self._lock = threading.Lock()

    @property
    def model_id(self) -> str:
        return f"sentence-transformers:{self._config.model_name}"

    def _get_model(self) -> SentenceTransformer:
        with self._lock:
            if self._model is None:
                logger.info("Загрузка модели sentence-transformers: %s", self._config.model_name)
                self._model = SentenceTransformer(self._config.model_name, device=self._config.device)
            return self._model

    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            embeddings = self._get_model().encode(
                list(texts),
                batch_size=self._config.batch_size,
                normalize_embeddings=self._config.normalize_embeddings,
                show_progress_bar=False,
            )
        except Exception:  # pragma: no cover - зависит от модели
            logger.exception("Не удалось закодировать %d текстов моделью %s", len(texts), self._config.model_name)
            return [[] for _ in texts]
        return embeddings.tolist()

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            return []
        return self.embed_texts([text])[0]


__all__ = ["SentenceTransformersEmbedder", "SentenceTransformersConfig"]
