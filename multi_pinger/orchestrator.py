"""
Оркестратор: запуск вывода отчетов и потоков ping для всех целей
"""

import subprocess
import threading
import time
import logging
from enum import Enum
from typing import Callable, List, Optional, TextIO

from .config import PingerConfig
from .exceptions import ConfigurationError, WorkerStartError
from .models import ProbeTask, RunSummary
from .report_queue import ReportQueue
from .reporter import Reporter
from .worker import ProbeWorker

logger = logging.getLogger(__name__)


class OrchestratorState(Enum):
    """Состояние оркестратора"""
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


class Orchestrator:
    """Управление жизненным циклом запуска"""

    def __init__(self, config: Optional[PingerConfig] = None,
                 queue: Optional[ReportQueue] = None,
                 popen: Callable = subprocess.Popen,
                 stream: Optional[TextIO] = None,
                 on_progress: Optional[Callable[[int, int], None]] = None):
        """
        Инициализация

        Args:
            config: Конфигурация запуска
            queue: Очередь отчетов (по умолчанию создается по конфигурации)
            popen: Фабрика процессов для потоков ping
            stream: Поток вывода отчетов (по умолчанию stdout)
            on_progress: Вызывается с (завершено, всего) по окончании каждого потока
        """
        self.config = config or PingerConfig()
        if queue is None:
            queue = ReportQueue(
                capacity=self.config.queue_capacity,
                drop_when_full=self.config.drop_when_full
            )
        self.queue = queue
        self.popen = popen
        self.stream = stream
        self.on_progress = on_progress
        self.state = OrchestratorState.IDLE
        self.lock = threading.Lock()
        self._completed = 0

    def _set_state(self, state: OrchestratorState):
        logger.debug(f"Состояние: {self.state.value} -> {state.value}")
        self.state = state

    def run(self, targets: List[str]) -> RunSummary:
        """
        Выполнение ping для всех целей

        Args:
            targets: Список целей

        Returns:
            Сводка по запуску

        Raises:
            ConfigurationError: Если список целей пуст
        """
        if self.state is not OrchestratorState.IDLE:
            raise RuntimeError("Оркестратор уже запускался")
        if not targets:
            raise ConfigurationError("список целей пуст", field="targets")

        tasks = [
            ProbeTask(target=target,
                      repeat_count=self.config.repeat_count,
                      timeout_ms=self.config.timeout_ms)
            for target in targets
        ]

        start_time = time.time()
        reporter = Reporter(
            self.queue,
            stream=self.stream,
            poll_interval=self.config.poll_interval,
            flush_on_stop=self.config.flush_on_stop
        )

        self._set_state(OrchestratorState.RUNNING)
        logger.info(f"Запуск ping для {len(tasks)} целей")

        workers = [
            ProbeWorker(task, self.queue,
                        popen=self.popen,
                        probe_binary=self.config.probe_binary,
                        cooldown_seconds=self.config.cooldown_seconds)
            for task in tasks
        ]

        threads = []
        current = "reporter"
        try:
            reporter.start()
            for worker in workers:
                current = worker.target
                threads.append(self._start_worker(worker, len(workers)))
        except RuntimeError as e:
            error = WorkerStartError(current, str(e))
            logger.critical(str(error))
            self._terminate(reporter)
            return RunSummary(
                state=self.state.value,
                exit_code=1,
                reports=[worker.report for worker in workers],
                submitted=self.queue.submitted,
                dropped=self.queue.dropped,
                duration=time.time() - start_time,
                error=str(error)
            )

        for thread in threads:
            thread.join()

        self._set_state(OrchestratorState.DRAINING)
        if self.config.grace_seconds > 0:
            time.sleep(self.config.grace_seconds)

        self._terminate(reporter)

        reports = [worker.report for worker in workers]
        for report in reports:
            if not report.launched:
                logger.warning(f"ping для {report.target} не запущен: {report.error}")

        duration = time.time() - start_time
        logger.info(f"Завершено за {duration:.1f} секунд, "
                    f"записей: {self.queue.submitted}, отброшено: {self.queue.dropped}")

        return RunSummary(
            state=self.state.value,
            exit_code=0,
            reports=reports,
            submitted=self.queue.submitted,
            dropped=self.queue.dropped,
            duration=duration
        )

    def _start_worker(self, worker: ProbeWorker, total: int) -> threading.Thread:
        thread = threading.Thread(
            target=self._run_worker,
            args=(worker, total),
            name=f"probe-{worker.target}",
            daemon=True
        )
        thread.start()
        return thread

    def _run_worker(self, worker: ProbeWorker, total: int):
        try:
            worker.run()
        except Exception as e:
            logger.error(f"Ошибка потока для {worker.target}: {e}")
            worker.report.error = str(e)
        finally:
            with self.lock:
                self._completed += 1
                completed = self._completed
            if self.on_progress is not None:
                self.on_progress(completed, total)

    def _terminate(self, reporter: Reporter):
        reporter.stop(timeout=max(self.config.poll_interval * 4, 1.0))
        self.queue.close()
        self._set_state(OrchestratorState.TERMINATED)
