"""Minimal client for the Gemini Generative Language REST API."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)

BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass(slots=True)
class GeminiConfig:
    api_key: str | None = None
    model: str = "gemini-2.0-flash"
    embed_model: str = "text-embedding-004"
    base_url: str = BASE_URL
    temperature: float = 0.15
    max_output_tokens: int = 200
    timeout: float = 15.0


class GeminiClient:
    """Calls ``generateContent`` and ``embedContent``.

    Failures never raise: a missing key, HTTP error, timeout or unexpected
    payload yields ``""`` from :meth:`generate` and ``[]`` from :meth:`embed`.
    """

    def __init__(self, config: GeminiConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def config(self) -> GeminiConfig:
        return self._config

    def _api_key(self) -> str | None:
        return self._config.api_key or os.getenv("GEMINI_API_KEY")

    def generate(self, prompt: str, instruction: str = "") -> str:
        api_key = self._api_key()
        if not api_key:
            logger.error("Gemini API key is missing, generation skipped.")
            return ""
        text = f"{instruction}\n\nUSER: {prompt}" if instruction else prompt
        body = {
            "contents": [{"role": "user", "parts": [{"text": text}]}],
            "generationConfig": {
                "temperature": self._config.temperature,
                "maxOutputTokens": self._config.max_output_tokens,
            },
        }
        payload = self._post(f"{self._config.model}:generateContent", api_key, body)
        if payload is None:
            return ""
        try:
            return str(payload["candidates"][0]["content"]["parts"][0]["text"]).strip()
        except (KeyError, IndexError, TypeError):
            logger.warning("Unexpected Gemini generate payload: %s", payload)
            return ""

    def embed(self, text: str) -> list[float]:
        api_key = self._api_key()
        if not api_key:
            logger.error("Gemini API key is missing, embedding skipped.")
            return []
        body = {"content": {"parts": [{"text": text}]}}
        payload = self._post(f"{self._config.embed_model}:embedContent", api_key, body)
        if payload is None:
            return []
        values = (payload.get("embedding") or {}).get("values") or []
        try:
            return [float(value) for value in values]
        except (TypeError, ValueError):
            logger.warning("Gemini returned a malformed embedding.")
            return []

    def _post(self, method: str, api_key: str, body: dict) -> dict | None:
        url = f"{self._config.base_url}/{method}"
        try:
            response = self._session.post(
                url,
                params={"key": api_key},
                json=body,
                timeout=self._config.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout:
            logger.warning("Gemini request %s timed out after %.1fs", method, self._config.timeout)
            return None
        except (requests.RequestException, ValueError):
            logger.exception("Gemini request %s failed.", method)
            return None
        if not isinstance(payload, dict):
            logger.warning("Gemini request %s returned a non-object payload.", method)
            return None
        return payload


__all__ = ["GeminiClient", "GeminiConfig", "BASE_URL"]
