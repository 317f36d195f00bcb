"""
Модуль конфигурации
"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class PingerConfig:
    """Конфигурация запуска с валидацией"""

    # Параметры ping
    repeat_count: int = 10
    timeout_ms: int = 1000
    probe_binary: str = "ping"

    # Очередь отчетов
    queue_capacity: int = 100
    drop_when_full: bool = True

    # Тайминги, секунды
    cooldown_seconds: float = 3.0
    grace_seconds: float = 1.0
    poll_interval: float = 0.5
    flush_on_stop: bool = True

    # Настройки вывода
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    show_summary: bool = False
    color: bool = True

    def __post_init__(self):
        """Валидация значений после инициализации"""
        self._validate_values()

    def _validate_values(self):
        """Проверка корректности значений"""
        if self.repeat_count <= 0:
            raise ConfigurationError("должен быть положительным числом", field="repeat_count")
        if self.timeout_ms < 0:
            raise ConfigurationError("не может быть отрицательным", field="timeout_ms")
        if self.queue_capacity <= 0:
            raise ConfigurationError("должен быть положительным числом", field="queue_capacity")
        if not isinstance(self.probe_binary, str) or not self.probe_binary:
            raise ConfigurationError("команда не может быть пустой", field="probe_binary")

        for name in ("cooldown_seconds", "grace_seconds"):
            if getattr(self, name) < 0:
                raise ConfigurationError("не может быть отрицательным", field=name)
        if self.poll_interval <= 0:
            raise ConfigurationError("должен быть положительным числом", field="poll_interval")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if not isinstance(self.log_level, str) or self.log_level.upper() not in valid_log_levels:
            raise ConfigurationError(f"должен быть одним из: {valid_log_levels}", field="log_level")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigurationError("должен быть путем к файлу", field="log_file")

    def to_dict(self) -> Dict[str, Any]:
        """Преобразование в словарь"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PingerConfig":
        """Создание из словаря, неизвестные ключи пропускаются"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Неизвестные параметры конфигурации пропущены: {sorted(unknown)}")

        try:
            return cls(**{k: v for k, v in data.items() if k in known})
        except TypeError as e:
            raise ConfigurationError(f"некорректные значения: {e}") from e

    def merged(self, overrides: Dict[str, Any]) -> "PingerConfig":
        """Новая конфигурация с переопределенными значениями (None пропускается)"""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return PingerConfig.from_dict(data)


class ConfigLoader:
    """Загрузчик конфигурации"""

    CONFIG_FILES = [
        "multi_pinger.yaml",
        "multi_pinger.yml",
        "multi_pinger.json",
    ]

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> PingerConfig:
        """
        Загрузка конфигурации

        Args:
            config_path: Путь к файлу конфигурации (опционально)

        Returns:
            Объект конфигурации

        Raises:
            ConfigurationError: Если указанный файл не найден или не читается
        """
        found_config = cls._find_config_file(config_path)

        if found_config is None:
            if config_path:
                raise ConfigurationError(f"файл не найден: {config_path}", field="config")
            logger.debug("Файл конфигурации не найден, используются значения по умолчанию")
            return PingerConfig()

        data = cls._load_config_file(found_config)
        logger.info(f"Загружена конфигурация из {found_config}")
        return PingerConfig.from_dict(data)

    @classmethod
    def _find_config_file(cls, config_path: Optional[str] = None) -> Optional[Path]:
        """Поиск файла конфигурации"""
        if config_path:
            path = Path(config_path)
            return path if path.exists() else None

        for config_file in cls.CONFIG_FILES:
            path = Path(config_file)
            if path.exists():
                return path

        return None

    @staticmethod
    def _load_config_file(filepath: Path) -> Dict[str, Any]:
        """Загрузка конфигурации из YAML или JSON файла"""
        try:
            content = filepath.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigurationError(f"ошибка чтения {filepath}: {e}", field="config") from e

        data = None

        # Пробуем YAML (JSON тоже является YAML)
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError:
            pass

        # Пробуем JSON
        if data is None and content.strip():
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"не удалось разобрать {filepath}: {e}", field="config") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"ожидается словарь параметров в {filepath}", field="config")

        return data


def split_targets(raw: Optional[str]) -> List[str]:
    """
    Разбор списка целей через запятую

    Args:
        raw: Строка вида "host1,host2"

    Returns:
        Список целей без пустых значений и дубликатов
    """
    if not raw:
        return []

    targets = []
    for item in raw.split(','):
        item = item.strip()
        if item and item not in targets:
            targets.append(item)

    return targets
