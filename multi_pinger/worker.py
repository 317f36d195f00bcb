"""
Поток ping для одной цели
"""

import math
import subprocess
import time
import logging
from typing import Callable, List

from .exceptions import QueueFullError
from .models import (
    LineKind,
    ProbeTask,
    ReportEntry,
    TargetReport,
)
from .parser import classify, format_packets, format_rtt, format_seq
from .report_queue import ReportQueue

logger = logging.getLogger(__name__)

DEFAULT_PROBE = "ping"
DEFAULT_COOLDOWN = 3.0


class ProbeWorker:
    """Запускает ping для одной цели и отправляет итоговые строки в очередь"""

    def __init__(self, task: ProbeTask, queue: ReportQueue,
                 popen: Callable = subprocess.Popen,
                 probe_binary: str = DEFAULT_PROBE,
                 cooldown_seconds: float = DEFAULT_COOLDOWN):
        """
        Инициализация потока

        Args:
            task: Задание (цель, количество запросов, таймаут)
            queue: Общая очередь отчетов
            popen: Фабрика процессов, совместимая с subprocess.Popen
            probe_binary: Команда ping
            cooldown_seconds: Пауза после завершения процесса
        """
        self.task = task
        self.queue = queue
        self.popen = popen
        self.probe_binary = probe_binary
        self.cooldown_seconds = cooldown_seconds
        self.report = TargetReport(target=task.target)

    @property
    def target(self) -> str:
        return self.task.target

    def build_command(self) -> List[str]:
        """Построение команды ping"""
        cmd = [self.probe_binary, '-c', str(self.task.repeat_count)]

        if self.task.timeout_ms > 0:
            # -W принимает секунды, округляем вверх
            cmd.extend(['-W', str(math.ceil(self.task.timeout_ms / 1000))])

        cmd.append(self.task.target)
        return cmd

    def run(self) -> TargetReport:
        """
        Выполнение ping и разбор вывода построчно

        Returns:
            Результат для цели
        """
        cmd = self.build_command()
        logger.debug(f"Запуск: {' '.join(cmd)}")

        try:
            process = self.popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors='replace'
            )
        except OSError as e:
            logger.error(f"Ошибка запуска ping для {self.target}: {e}")
            self.report.error = str(e)
            self._cooldown()
            return self.report

        self.report.launched = True

        with process:
            for line in process.stdout:
                self.handle_line(line)
            # stderr читается после stdout: ping пишет туда одну-две строки
            errors = process.stderr.read().strip() if process.stderr else ""
            self.report.return_code = process.wait()

        if self.report.return_code != 0:
            self.report.error = errors or f"код завершения {self.report.return_code}"
            logger.warning(f"ping для {self.target} завершен с кодом "
                           f"{self.report.return_code}: {self.report.error}")
        else:
            logger.debug(f"ping для {self.target} завершен с кодом 0")

        self._cooldown()
        return self.report

    def _cooldown(self):
        if self.cooldown_seconds > 0:
            time.sleep(self.cooldown_seconds)

    def handle_line(self, line: str):
        """Классификация строки и отправка итогов в очередь"""
        parsed = classify(line)

        if parsed.kind is LineKind.SEQ:
            self.report.replies.append(parsed)
            logger.debug(f"{self.target}: {format_seq(parsed)}")
        elif parsed.kind is LineKind.PACKETS:
            self.report.packets = parsed
            self._submit(format_packets(parsed))
        elif parsed.kind is LineKind.RTT:
            self.report.rtt = parsed
            self._submit(format_rtt(parsed))

    def _submit(self, text: str):
        try:
            accepted = self.queue.submit(ReportEntry(target=self.target, text=text))
        except QueueFullError as e:
            logger.warning(f"{self.target}: {e}")
            return
        if accepted:
            self.report.submitted += 1
