"""Tokenizer shared by every keyword-based computation."""
from __future__ import annotations

import re

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def _split(text: str | None) -> list[str]:
    if not text:
        return []
    return _NON_ALNUM_RE.sub(" ", text.lower()).split()


def tokenize(text: str | None) -> list[str]:
    """Lowercase, replace punctuation with spaces and split on whitespace.

    Tokens made only of digits are dropped, so ``"Hello, World!  123"``
    yields ``["hello", "world"]``.
    """
    return [token for token in _split(text) if not token.isdigit()]


def normalize_text(text: str | None) -> str:
    """Canonical form of a text, used as a cache key.

    Unlike :func:`tokenize` numbers are kept: "class 10 fees" and
    "class 12 fees" are different questions.
    """
    return " ".join(_split(text))


__all__ = ["tokenize", "normalize_text"]
