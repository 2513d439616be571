"""Use case that routes navigation queries to panoramas or projects."""
from __future__ import annotations

import logging
from typing import Sequence

from application.services.target_resolver import DEFAULT_MAX_EDIT_DISTANCE, route
from domain.entities import NamedTarget, TargetMatch

logger = logging.getLogger(__name__)


def route_navigation(
    question: str,
    *,
    panoramas: Sequence[NamedTarget] = (),
    projects: Sequence[NamedTarget] = (),
    max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
) -> TargetMatch | None:
    """Resolve ``question`` against panoramas first, then projects."""
    match = route(question, (panoramas, projects), max_edit_distance=max_edit_distance)
    if match is None:
        logger.debug("No navigation target for %r", question)
    else:
        logger.info("Routed %r to %s %r", question, match.target.kind, match.target.label)
    return match


__all__ = ["route_navigation"]
