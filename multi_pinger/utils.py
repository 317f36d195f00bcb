"""
Вспомогательные утилиты
"""

import sys
import logging
from typing import Optional


def setup_logging(log_level: str = "WARNING", log_file: Optional[str] = None):
    """
    Настройка логирования

    Консольный обработчик пишет в stderr: stdout занят потоком отчетов.

    Args:
        log_level: Уровень логирования
        log_file: Файл лога (опционально)
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    # Очищаем существующие обработчики
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter(log_format, date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)


def log_progress(completed: int, total: int):
    """Прогресс выполнения потоков в лог"""
    percent = (completed / total * 100) if total > 0 else 0
    logging.getLogger(__name__).info(f"Прогресс: {completed}/{total} ({percent:.1f}%)")
