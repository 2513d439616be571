"""Настройка логирования для API, Streamlit и скриптов."""
from __future__ import annotations

import logging
import os
from pathlib import Path

# Сторонние библиотеки, которые слишком многословны на INFO.
_NOISY_LOGGERS = ("urllib3", "httpx", "sentence_transformers")


def setup_logging(level: str | None = None) -> None:
    """Подключить консольный и (если задан файл) файловый обработчик к root-логгеру.

    Уровень берётся из аргумента или ``FAQBOT_LOG_LEVEL``; пустой
    ``FAQBOT_LOG_FILE`` отключает запись в файл. Повторный вызов ничего не делает.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = (level or os.getenv("FAQBOT_LOG_LEVEL", "INFO")).upper()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = os.getenv("FAQBOT_LOG_FILE", "faqbot.log")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
