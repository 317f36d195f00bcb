"""
Вывод отчетов

Reporter печатает записи очереди по мере поступления,
SummaryReport формирует итоговую таблицу после завершения.
"""

import sys
import threading
import logging
from typing import List, Optional, TextIO

from colorama import Fore, Style

from .models import ReportEntry, RunSummary, TargetReport
from .report_queue import ReportQueue

logger = logging.getLogger(__name__)


class Reporter:
    """Единственный читатель очереди отчетов"""

    def __init__(self, queue: ReportQueue, stream: Optional[TextIO] = None,
                 poll_interval: float = 0.5, flush_on_stop: bool = True):
        """
        Инициализация

        Args:
            queue: Очередь отчетов
            stream: Поток вывода (по умолчанию stdout)
            poll_interval: Максимальное время ожидания записей за одну итерацию
            flush_on_stop: Напечатать остаток очереди при остановке
        """
        self.queue = queue
        self.stream = stream
        self.poll_interval = poll_interval
        self.flush_on_stop = flush_on_stop
        self.printed = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> threading.Thread:
        """
        Запуск потока вывода

        Raises:
            RuntimeError: Если поток не удалось создать
        """
        self._thread = threading.Thread(target=self.run, name="reporter", daemon=True)
        self._thread.start()
        return self._thread

    def run(self):
        """Основной цикл: ждать записи, печатать пачку целиком"""
        while not self._stop_event.is_set():
            self.print_entries(self.queue.wait_and_drain(self.poll_interval))

        if self.flush_on_stop:
            self.print_entries(self.queue.drain_all())

        logger.debug(f"Вывод отчетов остановлен, напечатано записей: {self.printed}")

    def print_entries(self, entries: List[ReportEntry]):
        """Печать пачки записей"""
        if not entries:
            return

        stream = self.stream or sys.stdout
        for entry in entries:
            stream.write(entry.format() + "\n")
        stream.flush()
        self.printed += len(entries)

    def stop(self, timeout: Optional[float] = None):
        """
        Остановка между итерациями цикла

        Args:
            timeout: Время ожидания завершения потока
        """
        self._stop_event.set()
        self.queue.close()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Поток вывода отчетов не завершился вовремя")


class SummaryReport:
    """Итоговая таблица по всем целям"""

    def __init__(self, color: bool = False):
        self.color = color

    def _paint(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def generate(self, summary: RunSummary) -> str:
        """
        Генерация текстового отчета

        Args:
            summary: Сводка по запуску

        Returns:
            Строка с отчетом
        """
        report_lines = [
            "=" * 60,
            "ИТОГИ",
            "=" * 60,
        ]

        for report in summary.reports:
            report_lines.extend(self._target_lines(report))
            report_lines.append("")

        report_lines.extend([
            f"Целей: {len(summary.reports)}",
            f"Записей в очереди: {summary.submitted}, отброшено: {summary.dropped}",
            f"Время выполнения: {summary.duration:.1f} сек",
            "=" * 60,
        ])

        return "\n".join(report_lines)

    def _target_lines(self, report: TargetReport) -> List[str]:
        if not report.launched:
            return [
                self._paint(f"{report.target}:", Fore.RED),
                f"  Ошибка запуска: {report.error}",
            ]

        color = Fore.GREEN if report.is_reachable else Fore.YELLOW
        lines = [self._paint(f"{report.target}:", color)]

        if report.packets is not None:
            loss = report.packets.loss_percent
            loss_text = f"{loss:.1f}%" if loss is not None else "n/a"
            lines.append(f"  Sent: {report.packets.sent} Received: {report.packets.received} "
                         f"Loss: {loss_text}")

        if report.rtt is not None:
            lines.append(f"  Min: {report.rtt.min_ms:.3f} Avg: {report.rtt.avg_ms:.3f} "
                         f"Max: {report.rtt.max_ms:.3f} Std: {report.rtt.stdev_ms:.3f}")

        if report.packets is None and report.rtt is None:
            lines.append(f"  Нет итоговой статистики (код завершения {report.return_code})")

        return lines
