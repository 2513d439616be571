"""Meaning validator that asks Gemini whether two questions are the same."""
from __future__ import annotations

import logging

from domain.interfaces import MeaningValidator
from infrastructure.llm.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
Determine if these two questions have the SAME MEANING.

You MUST treat the following as SAME meaning:
- "school" = "campus"
- "hostel food" = "mess food" = "food for hostel students"
- "canteen" = "food area" = "snacks place"
- Grammar differences do NOT change meaning
- Word order differences do NOT change meaning
- Spelling mistakes do NOT change meaning
- Missing helper words ("in", "at", "for") do NOT change meaning

If both questions are about the same topic,
reply EXACTLY: "yes"

If NOT same topic, reply EXACTLY: "no"

User question: "{query}"
FAQ question: "{candidate}"

Reply ONLY "yes" or "no".
"""


class GeminiMeaningValidator(MeaningValidator):
    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    def validate_same_meaning(self, query_text: str, candidate_text: str) -> bool:
        if not query_text or not candidate_text:
            return False
        reply = self._client.generate(PROMPT_TEMPLATE.format(query=query_text, candidate=candidate_text))
        verdict = reply.strip().lower()
        logger.debug("Meaning check %r vs %r -> %r", query_text, candidate_text, verdict)
        return "yes" in verdict


__all__ = ["GeminiMeaningValidator", "PROMPT_TEMPLATE"]
