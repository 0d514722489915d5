"""
Доменный слой - ядро бизнес-логики.

Содержит:
- Доменные модели (entities)
- Перечисления (enums)
- Доменные исключения (exceptions)

Правила:
- НЕ зависит от других слоев
- Чистая бизнес-логика без инфраструктуры
- Immutable модели где возможно
"""

from .enums import Severity, SyncAction
from .exceptions import (
    DomainException,
    FeedDecodeError,
    FeedFetchError,
    MastodonApiError,
    RemoteMutationError,
    RemoteReadError,
)
from .models import (
    BlockRule,
    DomainBlock,
    Mutation,
    RemoteDomainBlock,
    SyncReport,
)

__all__ = [
    # Models
    "BlockRule",
    "DomainBlock",
    "RemoteDomainBlock",
    "Mutation",
    "SyncReport",
    # Enums
    "Severity",
    "SyncAction",
    # Exceptions
    "DomainException",
    "FeedFetchError",
    "FeedDecodeError",
    "MastodonApiError",
    "RemoteReadError",
    "RemoteMutationError",
]
