"""Rewriter used when no LLM is configured."""
from __future__ import annotations

from domain.entities import Query
from domain.interfaces import QueryRewriter


class SimpleQueryRewriter(QueryRewriter):
    """Collapse runs of whitespace; the wording itself is left alone."""

    def rewrite(self, query: Query) -> Query:
        return Query(text=" ".join(query.text.split()), metadata=dict(query.metadata))


__all__ = ["SimpleQueryRewriter"]
