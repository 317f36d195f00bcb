"""
Ограниченная очередь отчетов

Несколько потоков-писателей, один читатель. Читатель забирает
все содержимое очереди за одну операцию.
"""

import threading
import logging
from typing import List, Optional

from .exceptions import QueueFullError
from .models import ReportEntry

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100


class ReportQueue:
    """Общая очередь записей (target, text) с фиксированной емкостью"""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, drop_when_full: bool = True):
        """
        Инициализация очереди

        Args:
            capacity: Максимальное количество записей
            drop_when_full: Отбрасывать новые записи при переполнении
                (иначе submit выбрасывает QueueFullError)
        """
        if capacity <= 0:
            raise ValueError("capacity должен быть положительным числом")

        self.capacity = capacity
        self.drop_when_full = drop_when_full
        self._entries: List[ReportEntry] = []
        self._condition = threading.Condition(threading.Lock())
        self._closed = False
        self.submitted = 0
        self.dropped = 0

    def __len__(self) -> int:
        with self._condition:
            return len(self._entries)

    def __bool__(self) -> bool:
        # Истинна и когда пуста
        return True

    @property
    def closed(self) -> bool:
        """Очередь закрыта и больше не принимает записи"""
        with self._condition:
            return self._closed

    def submit(self, entry: ReportEntry) -> bool:
        """
        Добавление записи без блокировки писателя

        Args:
            entry: Запись для отчета

        Returns:
            True если запись принята, False если отброшена
        """
        with self._condition:
            if self._closed:
                self.dropped += 1
                logger.debug(f"Очередь закрыта, запись для {entry.target} отброшена")
                return False

            if len(self._entries) >= self.capacity:
                if not self.drop_when_full:
                    raise QueueFullError(self.capacity)
                self.dropped += 1
                logger.debug(f"Очередь заполнена, запись для {entry.target} отброшена")
                return False

            self._entries.append(entry)
            self.submitted += 1
            self._condition.notify()
            return True

    def drain_all(self) -> List[ReportEntry]:
        """
        Забрать все содержимое очереди и очистить ее

        Returns:
            Список записей в порядке добавления (пустой если очередь пуста)
        """
        with self._condition:
            return self._take()

    def wait_and_drain(self, timeout: Optional[float] = None) -> List[ReportEntry]:
        """
        Дождаться записей (или закрытия очереди) и забрать их все

        Args:
            timeout: Максимальное время ожидания в секундах

        Returns:
            Список записей, пустой если истек таймаут
        """
        with self._condition:
            self._condition.wait_for(lambda: self._entries or self._closed, timeout=timeout)
            return self._take()

    def close(self):
        """Закрыть очередь и разбудить ожидающего читателя"""
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def _take(self) -> List[ReportEntry]:
        # Вызывается только под блокировкой
        entries = self._entries
        self._entries = []
        return entries
