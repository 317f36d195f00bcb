"""
Точка входа multi-pinger
"""

import argparse
import subprocess
import sys
import logging
from typing import Callable, List, Optional

import colorama

from .config import ConfigLoader, split_targets
from .exceptions import ConfigurationError
from .orchestrator import Orchestrator
from .reporter import SummaryReport
from .utils import setup_logging, log_progress

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Парсер аргументов командной строки"""
    parser = argparse.ArgumentParser(
        prog='multi-pinger',
        description='Одновременный ping нескольких целей с общим потоком отчетов',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  multi-pinger --targets 8.8.8.8,1.1.1.1
  multi-pinger -t example.com,8.8.4.4 -c 5 --timeout 2000 --summary
  multi-pinger -t 10.0.0.1 --config multi_pinger.yaml -v
        """
    )

    parser.add_argument(
        '--targets', '-t',
        required=True,
        help='Список целей через запятую'
    )

    parser.add_argument(
        '--count', '-c',
        type=int,
        default=None,
        help='Количество запросов на цель (по умолчанию: 10)'
    )

    parser.add_argument(
        '--timeout', '-o',
        type=int,
        default=None,
        help='Таймаут ожидания ответа в миллисекундах (по умолчанию: 1000)'
    )

    parser.add_argument(
        '--config',
        help='Файл конфигурации (YAML/JSON)'
    )

    parser.add_argument(
        '--probe',
        default=None,
        help='Команда ping (по умолчанию: ping)'
    )

    parser.add_argument(
        '--summary',
        action='store_true',
        help='Вывести итоговую таблицу после завершения'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Отключить цвета в итоговой таблице'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод (DEBUG уровень)'
    )

    return parser


def main(argv: Optional[List[str]] = None, popen: Callable = subprocess.Popen) -> int:
    """
    Основная функция

    Returns:
        Код завершения процесса
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ConfigLoader.load(args.config)
        config = config.merged({
            'repeat_count': args.count,
            'timeout_ms': args.timeout,
            'probe_binary': args.probe,
            'log_level': 'DEBUG' if args.verbose else None,
            'show_summary': True if args.summary else None,
            'color': False if args.no_color else None,
        })
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        print(f"Ошибка: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level, config.log_file)

    targets = split_targets(args.targets)
    if not targets:
        parser.print_usage(sys.stderr)
        print("Ошибка: --targets должен содержать хотя бы одну цель", file=sys.stderr)
        return 2

    orchestrator = Orchestrator(config, popen=popen, on_progress=log_progress)

    try:
        summary = orchestrator.run(targets)
    except ConfigurationError as e:
        print(f"Ошибка: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nПрервано пользователем", file=sys.stderr)
        return 130

    if summary.error:
        print(f"Ошибка: {summary.error}", file=sys.stderr)

    if config.show_summary:
        color = config.color and sys.stdout.isatty()
        if color:
            colorama.init()
        print(SummaryReport(color=color).generate(summary))

    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
