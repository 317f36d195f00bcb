"""
Исключения multi-pinger
"""


class MultiPingerError(Exception):
    """Базовое исключение для всех ошибок multi-pinger"""
    pass


class ConfigurationError(MultiPingerError):
    """
    Ошибка конфигурации или аргументов запуска

    Возникает до начала работы: пустой список целей,
    некорректные значения параметров, нечитаемый файл конфигурации.
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Ошибка параметра '{field}': {message}"
        super().__init__(full_message)


class WorkerStartError(MultiPingerError):
    """Не удалось создать поток для цели. Запуск прерывается целиком"""

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Не удалось запустить поток для {target}: {reason}")


class QueueFullError(MultiPingerError):
    """Очередь отчетов заполнена (только при drop_when_full=False)"""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Очередь отчетов заполнена (емкость {capacity})")
