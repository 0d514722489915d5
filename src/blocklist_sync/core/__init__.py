"""
Ядро приложения - константы и общие типы.
"""

from .constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TASK_INTERVAL,
    DOMAIN_BLOCKS_PAGE_LIMIT,
    DOMAIN_BLOCKS_PATH,
)
from .types import BlockId, DomainName, Seconds

__all__ = [
    # Constants
    "DOMAIN_BLOCKS_PATH",
    "DOMAIN_BLOCKS_PAGE_LIMIT",
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_TASK_INTERVAL",
    "DEFAULT_REQUEST_TIMEOUT",
    # Types
    "DomainName",
    "BlockId",
    "Seconds",
]
