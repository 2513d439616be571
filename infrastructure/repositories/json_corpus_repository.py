"""Репозиторий корпуса FAQ, читающий JSON-снимок с эмбеддингами."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from domain.entities import CorpusEntry
from domain.interfaces import CorpusRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "question", "answer")


class JsonCorpusRepository(CorpusRepository):
    """Reads ``[{id, question, answer, keyword?, intent?, vector}]`` from disk.

    A missing or unreadable file yields an empty corpus. Records without an
    id, question or answer are skipped; records without a vector are kept so
    the ranker can report them.
    """

    def __init__(self, path: str | Path = "data/embeddings.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def fingerprint(self) -> str:
        try:
            stat = self._path.stat()
        except OSError:
            return "missing"
        return f"{stat.st_mtime_ns}:{stat.st_size}"

    def load(self) -> list[CorpusEntry]:
        if not self._path.exists():
            logger.error("Corpus snapshot %s not found, run scripts/build_corpus.py", self._path)
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to read corpus snapshot %s", self._path)
            return []
        if not isinstance(raw, list):
            logger.error("Corpus snapshot %s must contain a JSON array", self._path)
            return []

        entries: list[CorpusEntry] = []
        for index, record in enumerate(raw):
            entry = _parse_record(record)
            if entry is None:
                logger.warning("Skipping malformed corpus record #%d in %s", index, self._path)
                continue
            entries.append(entry)
        return entries


def _parse_record(record: Any) -> CorpusEntry | None:
    if not isinstance(record, dict):
        return None
    if any(not str(record.get(name) or "").strip() for name in REQUIRED_FIELDS):
        return None
    try:
        vector = tuple(float(value) for value in record.get("vector") or ())
    except (TypeError, ValueError):
        vector = ()
    return CorpusEntry(
        id=str(record["id"]),
        question=str(record["question"]).strip(),
        answer=str(record["answer"]).strip(),
        keyword=(str(record["keyword"]).strip() or None) if record.get("keyword") else None,
        intent=(str(record["intent"]).strip() or None) if record.get("intent") else None,
        vector=vector,
    )


def dump_corpus(entries: list[CorpusEntry], path: str | Path) -> Path:
    """Write entries in the snapshot format."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = []
    for entry in entries:
        record: dict[str, Any] = {"id": entry.id, "question": entry.question, "answer": entry.answer}
        if entry.keyword:
            record["keyword"] = entry.keyword
        if entry.intent:
            record["intent"] = entry.intent
        record["vector"] = list(entry.vector)
        payload.append(record)
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return target


__all__ = ["JsonCorpusRepository", "dump_corpus"]
