"""Загрузка каталогов навигации: панорамы и проекты."""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from domain.entities import NamedTarget

logger = logging.getLogger(__name__)

_PANO_LABEL_RE = re.compile(r"^panorama_([A-Z0-9_]+)\.label\s*=\s*(.+)$")


def targets_from_labels(labels: list[str], kind: str = "pano") -> list[NamedTarget]:
    """Wrap plain labels, dropping blanks and case-insensitive duplicates."""
    seen: set[str] = set()
    targets: list[NamedTarget] = []
    for label in labels:
        clean = label.strip()
        key = clean.lower()
        if not clean or key in seen:
            continue
        seen.add(key)
        targets.append(NamedTarget(label=clean, kind=kind))
    return targets


def load_pano_labels(path: str | Path) -> list[NamedTarget]:
    """Parse ``panorama_<ID>.label = <Label>`` lines of a locale file."""
    locale_path = Path(path)
    try:
        text = locale_path.read_text(encoding="utf-8")
    except OSError:
        logger.warning("Panorama labels file %s is not readable", locale_path)
        return []
    labels = [match.group(2) for match in map(_PANO_LABEL_RE.match, text.splitlines()) if match]
    targets = targets_from_labels(labels, kind="pano")
    logger.info("Loaded %d panoramas from %s", len(targets), locale_path)
    return targets


def load_projects(path: str | Path) -> list[NamedTarget]:
    """Read ``{"projects": [{"title": ..., "url": ...}]}``."""
    links_path = Path(path)
    try:
        payload = json.loads(links_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Projects file %s is missing or malformed", links_path)
        return []

    seen: set[str] = set()
    targets: list[NamedTarget] = []
    projects = payload.get("projects", []) if isinstance(payload, dict) else []
    for item in projects:
        if not isinstance(item, dict):
            continue
        title = str(item.get("title") or "").strip()
        if not title or title.lower() in seen:
            continue
        seen.add(title.lower())
        targets.append(NamedTarget(label=title, kind="project", url=item.get("url") or None))
    logger.info("Loaded %d projects from %s", len(targets), links_path)
    return targets


__all__ = ["load_pano_labels", "load_projects", "targets_from_labels"]
