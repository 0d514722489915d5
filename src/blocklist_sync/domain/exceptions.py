"""
Доменные исключения.

Все исключения бизнес-логики должны наследоваться от DomainException.
Любое из них прерывает только текущий цикл синхронизации, но не процесс.
"""

from typing import Optional


class DomainException(Exception):
    """Базовое исключение доменного слоя."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class FeedFetchError(DomainException):
    """Блоклист недоступен."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not retrieve blocklist from {url}: {reason}", code="FEED_FETCH_FAILED")
        self.url = url
        self.reason = reason


class FeedDecodeError(DomainException):
    """Блоклист получен, но не разбирается."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not parse blocklist from {url}: {reason}", code="FEED_DECODE_FAILED")
        self.url = url
        self.reason = reason


class MastodonApiError(DomainException):
    """Ошибка вызова Mastodon API (не-2xx ответ или сетевая ошибка)."""

    def __init__(self, status: Optional[int], body: str):
        if status is None:
            message = f"request failed: {body}"
        else:
            message = f"{status}: {body}"
        super().__init__(message, code="MASTODON_API_ERROR")
        self.status = status
        self.body = body


class RemoteReadError(DomainException):
    """Не удалось прочитать текущие блокировки инстанса."""

    def __init__(self, reason: str):
        super().__init__(f"Could not read current domain blocks: {reason}", code="REMOTE_READ_FAILED")
        self.reason = reason


class RemoteMutationError(DomainException):
    """Не удалось применить изменение для домена."""

    def __init__(self, action, domain: str, cause: Exception):
        super().__init__(f"Could not {action} domain block for '{domain}': {cause}", code="REMOTE_MUTATION_FAILED")
        self.action = action
        self.domain = domain
        self.cause = cause
