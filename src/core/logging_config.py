"""
Logging Configuration

Единая настройка логирования проекта.

Численное ядро не логирует. Логи пишутся только на границах:
- Смена бэкенда фасада (INFO) и его локальное переопределение (DEBUG)
- Отчёты измерения точности (INFO, WARNING при превышении бюджета)
- Воспроизведение эталонных случаев (DEBUG на каждый провал)

Usage:
    from src.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Math library set to FASTMATH")

Библиотечный код не настраивает обработчики при импорте; приложение
или тестовый прогон вызывает configure_logging явно.
"""

import logging
import sys
from typing import Final, Optional

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Настройка корневого логгера.

    Args:
        level: Уровень логирования (например, logging.DEBUG)
        log_file: Путь к файлу лога; None — только консоль
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Логгер модуля.

    Args:
        name: Имя логгера (обычно __name__)

    Returns:
        logging.Logger
    """
    return logging.getLogger(name)
