"""Fuzzy resolution of navigation queries ("go to library") to catalog targets."""
from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from domain.entities import NamedTarget, TargetMatch

logger = logging.getLogger(__name__)

NAVIGATION_VERBS = (
    "go to",
    "go",
    "goto",
    "open",
    "show",
    "view",
    "take me to",
    "take me",
    "navigate",
    "visit",
    "see",
    "check",
    "look at",
)
FILLER_WORDS = ("the", "a", "an", "please", "pls", "kindly", "can you", "could you")

_VERBS_RE = re.compile(r"\b(" + "|".join(re.escape(verb) for verb in NAVIGATION_VERBS) + r")\b")
_FILLERS_RE = re.compile(r"\b(" + "|".join(re.escape(word) for word in FILLER_WORDS) + r")\b")
_PUNCT_RE = re.compile(r"[^\w\s]")
_DIGITS_RE = re.compile(r"\d+")
_SPACES_RE = re.compile(r"\s+")

DEFAULT_MAX_EDIT_DISTANCE = 2


def clean_navigation_query(text: str | None) -> str:
    """Strip navigation verbs, filler words, punctuation and digits."""
    if not text:
        return ""
    raw = text.lower().strip()
    raw = _VERBS_RE.sub("", raw)
    raw = _FILLERS_RE.sub("", raw)
    raw = _PUNCT_RE.sub("", raw)
    raw = _DIGITS_RE.sub("", raw)
    return _SPACES_RE.sub(" ", raw).strip()


def _is_fuzzy_match(label: str, cleaned: str, max_edit_distance: int) -> bool:
    return (
        cleaned in label
        or label in cleaned
        or Levenshtein.distance(label, cleaned) <= max_edit_distance
    )


def resolve(
    query_text: str | None,
    catalog: Sequence[NamedTarget],
    *,
    max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
) -> TargetMatch | None:
    """Find the catalog target a navigation query refers to.

    An exact (case-insensitive) label match always wins; otherwise the first
    target in catalog order whose label contains the cleaned query, is
    contained in it, or lies within ``max_edit_distance`` edits is returned.
    """
    cleaned = clean_navigation_query(query_text)
    if not cleaned:
        return None

    labelled = [(target, target.label.lower().strip()) for target in catalog]
    labelled = [(target, label) for target, label in labelled if label]

    for target, label in labelled:
        if label == cleaned:
            return TargetMatch(target=target, exact=True)

    for target, label in labelled:
        if _is_fuzzy_match(label, cleaned, max_edit_distance):
            logger.debug("Fuzzy target match %r -> %r", cleaned, target.label)
            return TargetMatch(target=target, exact=False)
    return None


def route(
    query_text: str | None,
    catalogs: Iterable[Sequence[NamedTarget]],
    *,
    max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
) -> TargetMatch | None:
    """Try catalogs in priority order; the first one that matches wins."""
    for catalog in catalogs:
        match = resolve(query_text, catalog, max_edit_distance=max_edit_distance)
        if match is not None:
            return match
    return None


__all__ = [
    "NAVIGATION_VERBS",
    "FILLER_WORDS",
    "DEFAULT_MAX_EDIT_DISTANCE",
    "clean_navigation_query",
    "resolve",
    "route",
]
