"""Корпус FAQ в памяти вместе со статистикой, с явной загрузкой и перезагрузкой."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from application.services.corpus_statistics import build_statistics
from application.services.spelling import Vocabulary, build_vocabulary
from domain.entities import CorpusEntry, CorpusStatistics
from domain.interfaces import CorpusRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CorpusSnapshot:
    """Entries plus the statistics and spelling vocabulary built from exactly those entries."""

    entries: tuple[CorpusEntry, ...]
    statistics: CorpusStatistics
    source_fingerprint: str = ""
    vocabulary: Vocabulary = field(default_factory=Vocabulary)

    @classmethod
    def from_entries(cls, entries: list[CorpusEntry], source_fingerprint: str = "") -> CorpusSnapshot:
        frozen = tuple(entries)
        return cls(
            entries=frozen,
            statistics=build_statistics(frozen),
            source_fingerprint=source_fingerprint,
            vocabulary=build_vocabulary(frozen),
        )

    @property
    def is_empty(self) -> bool:
        return not self.entries


class CorpusHandle:
    """Загружает корпус один раз и перестраивает статистику вместе с ним."""

    def __init__(self, repository: CorpusRepository) -> None:
        self._repository = repository
        self._snapshot: CorpusSnapshot | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def snapshot(self) -> CorpusSnapshot:
        """Return the current snapshot, loading it on first use."""
        current = self._snapshot
        if current is not None:
            return current
        return self.load()

    def load(self) -> CorpusSnapshot:
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._read()
            return self._snapshot

    def reload(self) -> CorpusSnapshot:
        with self._lock:
            self._snapshot = self._read()
            return self._snapshot

    def reload_if_changed(self) -> bool:
        """Reload when the repository fingerprint differs from the loaded one."""
        current = self._snapshot
        if current is not None and current.source_fingerprint == self._repository.fingerprint():
            return False
        self.reload()
        return True

    def _read(self) -> CorpusSnapshot:
        fingerprint = self._repository.fingerprint()
        entries = self._repository.load()
        snapshot = CorpusSnapshot.from_entries(entries, source_fingerprint=fingerprint)
        missing = sum(1 for entry in snapshot.entries if not entry.has_vector)
        if missing:
            logger.warning("%d of %d corpus entries have no embedding and will not be ranked", missing, len(entries))
        logger.info("Loaded %d corpus entries", len(entries))
        return snapshot


__all__ = ["CorpusSnapshot", "CorpusHandle"]
