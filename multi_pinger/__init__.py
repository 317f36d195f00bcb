"""
Одновременный ping нескольких целей с общей очередью отчетов
"""

__version__ = "1.0.0"
__author__ = "Network Automation Team"

from .config import PingerConfig, ConfigLoader, split_targets
from .exceptions import MultiPingerError, ConfigurationError, WorkerStartError, QueueFullError
from .models import (
    ProbeTask, SeqReply, PacketSummary, RttStats, Unrecognized, UNRECOGNIZED,
    ReportEntry, TargetReport, RunSummary, LineKind
)
from .parser import classify
from .report_queue import ReportQueue
from .worker import ProbeWorker
from .reporter import Reporter, SummaryReport
from .orchestrator import Orchestrator, OrchestratorState

__all__ = [
    'PingerConfig',
    'ConfigLoader',
    'split_targets',
    'MultiPingerError',
    'ConfigurationError',
    'WorkerStartError',
    'QueueFullError',
    'ProbeTask',
    'SeqReply',
    'PacketSummary',
    'RttStats',
    'Unrecognized',
    'UNRECOGNIZED',
    'ReportEntry',
    'TargetReport',
    'RunSummary',
    'LineKind',
    'classify',
    'ReportQueue',
    'ProbeWorker',
    'Reporter',
    'SummaryReport',
    'Orchestrator',
    'OrchestratorState',
]
