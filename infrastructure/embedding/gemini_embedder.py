"""Embedder backed by the Gemini embedding endpoint."""
from __future__ import annotations

from domain.interfaces import Embedder
from infrastructure.llm.gemini_client import GeminiClient


class GeminiEmbedder(Embedder):
    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    @property
    def model_id(self) -> str:
        return self._client.config.embed_model

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            return []
        return self._client.embed(text)


__all__ = ["GeminiEmbedder"]
