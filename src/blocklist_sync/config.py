"""
Конфигурация сервиса.
Все настройки читаются из окружения (и .env файла) в одном месте.
"""
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

from blocklist_sync.core.constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TASK_INTERVAL,
)
from blocklist_sync.core.types import Seconds

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """Парсит длительность в стиле "5m", "1h30m", "300ms", "1.5h" в секунды.

    Raises:
        ValueError: если строка не является длительностью
    """
    value = text.strip()
    if value in ("0", "+0", "-0"):
        return 0.0

    sign = 1.0
    if value[:1] in ("+", "-"):
        sign = -1.0 if value[0] == "-" else 1.0
        value = value[1:]
    if not value:
        raise ValueError(f"invalid duration: {text!r}")

    total = 0.0
    pos = 0
    while pos < len(value):
        match = _DURATION_PART.match(value, pos)
        if not match:
            raise ValueError(f"invalid duration: {text!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class MastodonSettings:
    """Подключение к Mastodon admin API."""

    base_url: str
    access_token: str


class Config:
    """Главный конфиг сервиса."""
    __slots__ = (
        'environment', 'log_level', 'task_interval', 'request_timeout',
        'dry_run', 'json_url', 'mastodon',
    )

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        env = os.environ if env is None else env

        self.environment = env.get("ENVIRONMENT", DEFAULT_ENVIRONMENT)
        self.log_level = env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)
        self.dry_run = _parse_bool(env.get("DRY_RUN", "false"))

        self.json_url = self._required(env, "JSON_URL")
        self.mastodon = MastodonSettings(
            base_url=self._required(env, "MASTODON_BASE_URL").rstrip("/"),
            access_token=self._required(env, "MASTODON_ACCESS_TOKEN"),
        )

        self.task_interval = self._duration(env, "TASK_INTERVAL", DEFAULT_TASK_INTERVAL)
        self.request_timeout = self._duration(env, "REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)

    @staticmethod
    def _required(env: Mapping[str, str], name: str) -> str:
        value = env.get(name, "").strip()
        if not value:
            raise ValueError(f"{name} не найден в окружении или .env файле")
        return value

    @staticmethod
    def _duration(env: Mapping[str, str], name: str, default: str) -> Seconds:
        raw = env.get(name, default)
        try:
            seconds = parse_duration(raw)
        except ValueError as e:
            raise ValueError(f"{name}: {e}") from e
        if seconds <= 0:
            raise ValueError(f"{name} должен быть больше нуля, получено {raw!r}")
        return Seconds(seconds)

    @property
    def is_dev(self) -> bool:
        """Запущен ли сервис в режиме разработки."""
        return self.environment.strip().lower() == "dev"


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Singleton конфиг с кэшированием."""
    load_dotenv(override=True)
    return Config()
