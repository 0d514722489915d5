"""
Доменные перечисления.
"""

from enum import Enum
from typing import Any


class Severity(Enum):
    """Строгость блокировки домена."""

    SILENCE = "silence"
    SUSPEND = "suspend"
    NONE = "none"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Нормализует строгость из внешних данных.

        Всё, что не silence/suspend/none (включая отсутствие значения), становится NONE.
        """
        if not isinstance(value, str):
            return cls.NONE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.NONE


class SyncAction(Enum):
    """Тип изменения на удалённой стороне."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value

    @property
    def verb(self) -> str:
        """Глагол для логов."""
        verbs = {
            self.CREATE: "Creating",
            self.UPDATE: "Updating",
            self.DELETE: "Removing",
        }
        return verbs[self]
