"""
Модели данных multi-pinger
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .exceptions import ConfigurationError


class LineKind(Enum):
    """Тип строки вывода ping"""
    SEQ = "seq"
    PACKETS = "packets"
    RTT = "rtt"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ProbeTask:
    """Задание для одного потока: цель и параметры ping"""
    target: str
    repeat_count: int = 10
    timeout_ms: int = 1000

    def __post_init__(self):
        """Проверка значений после инициализации"""
        if not self.target or not self.target.strip():
            raise ConfigurationError("цель не может быть пустой", field="target")
        if self.repeat_count <= 0:
            raise ConfigurationError("должен быть положительным числом", field="repeat_count")
        if self.timeout_ms < 0:
            raise ConfigurationError("не может быть отрицательным", field="timeout_ms")


@dataclass(frozen=True)
class SeqReply:
    """Одна строка ответа: icmp_seq и время отклика"""
    sequence: int
    round_trip_ms: float
    ttl: Optional[int] = None

    kind = LineKind.SEQ


@dataclass(frozen=True)
class PacketSummary:
    """Итоговые счетчики пакетов"""
    sent: int
    received: int

    kind = LineKind.PACKETS

    @property
    def loss_percent(self) -> Optional[float]:
        """Процент потерь, None если ни один пакет не отправлен"""
        if self.sent == 0:
            return None
        return 100.0 - self.received * 100.0 / self.sent


@dataclass(frozen=True)
class RttStats:
    """Итоговая статистика времени отклика, мс"""
    min_ms: float
    avg_ms: float
    max_ms: float
    stdev_ms: float

    kind = LineKind.RTT


@dataclass(frozen=True)
class Unrecognized:
    """Строка не подошла ни под один шаблон"""

    kind = LineKind.UNRECOGNIZED


UNRECOGNIZED = Unrecognized()

ParsedLine = Union[SeqReply, PacketSummary, RttStats, Unrecognized]


@dataclass(frozen=True)
class ReportEntry:
    """Запись очереди отчетов"""
    target: str
    text: str

    def format(self) -> str:
        """Строка для вывода в поток отчетов"""
        return f"{self.target}: {self.text}"


@dataclass
class TargetReport:
    """Результат работы потока для одной цели"""
    target: str
    launched: bool = False
    replies: List[SeqReply] = field(default_factory=list)
    packets: Optional[PacketSummary] = None
    rtt: Optional[RttStats] = None
    return_code: Optional[int] = None
    error: Optional[str] = None
    submitted: int = 0

    @property
    def is_reachable(self) -> bool:
        """Цель ответила хотя бы на один запрос"""
        if self.packets is not None:
            return self.packets.received > 0
        return bool(self.replies)


@dataclass
class RunSummary:
    """Сводка по запуску оркестратора"""
    state: str
    exit_code: int
    reports: List[TargetReport] = field(default_factory=list)
    submitted: int = 0
    dropped: int = 0
    duration: float = 0.0
    error: Optional[str] = None

    @property
    def failed_launches(self) -> List[str]:
        """Цели, для которых не удалось запустить ping"""
        return [report.target for report in self.reports if not report.launched]
