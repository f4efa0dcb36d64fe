"""Настройка логирования."""
import logging
import os
import sys

LOGGER_NAME = "iconbundle"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def debug_enabled() -> bool:
    """Режим отладки через переменную окружения DEBUG=1."""
    return os.getenv("DEBUG", "0").lower() in ("1", "true", "yes", "on")


def setup_logging(debug: bool = False) -> logging.Logger:
    """Настройка логгера пакета: один обработчик в stderr."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug or debug_enabled() else logging.INFO)

    # Повторный вызов не должен дублировать вывод
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
