"""
Разбор строк вывода ping

Поддерживается вывод iputils (Linux) и BSD/macOS ping.
"""

import re
from typing import Callable, List, Tuple

from .models import (
    UNRECOGNIZED,
    PacketSummary,
    ParsedLine,
    RttStats,
    SeqReply,
)

_NUMBER = r'(\d+(?:\.\d+)*)'

# Порядок важен: первое совпадение выигрывает
SEQ_PATTERN = re.compile(
    r'\d+ bytes from .+?:\s+(?:icmp_)?seq=(\d+)'
    r'(?:\s+ttl=(\d+))?'
    r'\s+time=' + _NUMBER + r'\s*ms\b'
)

PACKETS_PATTERN = re.compile(
    r'(\d+) packets transmitted,\s+(\d+)(?: packets)? received'
)

RTT_PATTERN = re.compile(
    r'min/avg/max/(?:mdev|stddev|std-dev) = '
    + _NUMBER + '/' + _NUMBER + '/' + _NUMBER + '/' + _NUMBER + r'\s*ms'
)


def _build_seq(match: re.Match) -> SeqReply:
    ttl = match.group(2)
    return SeqReply(
        sequence=int(match.group(1)),
        round_trip_ms=float(match.group(3)),
        ttl=int(ttl) if ttl is not None else None,
    )


def _build_packets(match: re.Match) -> PacketSummary:
    return PacketSummary(sent=int(match.group(1)), received=int(match.group(2)))


def _build_rtt(match: re.Match) -> RttStats:
    min_ms, avg_ms, max_ms, stdev_ms = (float(value) for value in match.groups())
    return RttStats(min_ms=min_ms, avg_ms=avg_ms, max_ms=max_ms, stdev_ms=stdev_ms)


PATTERNS: List[Tuple[re.Pattern, Callable[[re.Match], ParsedLine]]] = [
    (SEQ_PATTERN, _build_seq),
    (PACKETS_PATTERN, _build_packets),
    (RTT_PATTERN, _build_rtt),
]


def classify(line: str) -> ParsedLine:
    """
    Классификация одной строки вывода ping

    Args:
        line: Строка вывода (допускаются пробелы и перевод строки в конце)

    Returns:
        SeqReply, PacketSummary, RttStats или UNRECOGNIZED
    """
    if not line:
        return UNRECOGNIZED

    line = line.rstrip()

    for pattern, build in PATTERNS:
        match = pattern.search(line)
        if match is None:
            continue
        try:
            return build(match)
        except ValueError:
            # Число совпало по шаблону, но не разбирается (например 1.2.3)
            return UNRECOGNIZED

    return UNRECOGNIZED


def format_seq(reply: SeqReply) -> str:
    """Текст для строки ответа"""
    return f"seq {reply.sequence} time {reply.round_trip_ms:.3f} ms"


def format_packets(summary: PacketSummary) -> str:
    """Текст для итоговых счетчиков пакетов"""
    loss = summary.loss_percent
    if loss is None:
        return f"sent: {summary.sent} received: {summary.received} loss: n/a"
    return f"sent: {summary.sent} received: {summary.received} loss: {loss:.1f}%"


def format_rtt(stats: RttStats) -> str:
    """Текст для статистики времени отклика"""
    return (f"min: {stats.min_ms:.3f} avg: {stats.avg_ms:.3f} "
            f"max: {stats.max_ms:.3f} stdev: {stats.stdev_ms:.3f} (ms)")
