"""Построить JSON-снимок корпуса FAQ с эмбеддингами из сырых вопросов и ответов."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from application.services.text import tokenize
from domain.entities import CorpusEntry
from domain.interfaces import Embedder
from infrastructure.config import EngineConfig, build_default_container
from infrastructure.repositories.json_corpus_repository import dump_corpus
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 4
DEFAULT_CONTEXT = "official school FAQ content about academics, admissions, hostel, dining, sports, safety and facilities"


def extract_keywords(question: str, answer: str) -> str:
    """Unique tokens of at least four characters, in order of appearance."""
    tokens = [token for token in tokenize(f"{question} {answer}") if len(token) >= MIN_KEYWORD_LENGTH]
    return ", ".join(dict.fromkeys(tokens))


def build_embedding_text(question: str, answer: str, keywords: str, context: str = DEFAULT_CONTEXT) -> str:
    meaning = (
        f"This is {context}. "
        f'User question: "{question}". '
        f'Verified answer: "{answer}". '
        "Answer meaning must remain unchanged."
    )
    return f"QUESTION: {question}\nANSWER: {answer}\n\nMEANING BLOCK: {meaning}\n\nKEYWORDS: {keywords}"


def build_entries(items: list[dict], embedder: Embedder) -> list[CorpusEntry]:
    entries: list[CorpusEntry] = []
    for index, item in enumerate(items):
        question = str(item.get("question") or "").strip()
        answer = str(item.get("answer") or "").strip()
        if not question or not answer:
            logger.warning("Пропуск записи #%d без вопроса или ответа", index)
            continue
        keywords = extract_keywords(question, answer)
        logger.info("Эмбеддинг %d/%d", index + 1, len(items))
        vector = embedder.embed(build_embedding_text(question, answer, keywords))
        if not vector:
            logger.warning("Не удалось получить эмбеддинг для записи #%d", index)
        entries.append(
            CorpusEntry(
                id=str(item.get("id") or f"item_{index}"),
                question=question,
                answer=answer,
                keyword=keywords or None,
                intent=item.get("intent") or None,
                vector=tuple(vector),
            )
        )
    return entries


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", help="JSON-файл со списком {question, answer, intent?}")
    parser.add_argument(
        "--output",
        default=None,
        help="Куда записать снимок (по умолчанию: путь корпуса из конфигурации)",
    )
    parser.add_argument(
        "--embedder",
        choices=("gemini", "sentence-transformers", "hash"),
        default=None,
        help="Эмбеддер (по умолчанию: FAQBOT_EMBEDDER или gemini)",
    )
    return parser.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()
    config = EngineConfig.from_env()
    if args.embedder:
        config.embedder = args.embedder
    container = build_default_container(config)

    items = json.loads(Path(args.input).read_text(encoding="utf-8"))
    entries = build_entries(items, container.embedder)
    output = dump_corpus(entries, args.output or config.corpus_path)
    missing = sum(1 for entry in entries if not entry.has_vector)
    print(f"Записано {len(entries)} записей в {output} (без эмбеддинга: {missing})")


if __name__ == "__main__":
    main()
