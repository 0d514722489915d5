"""
Доменные модели (entities и value objects).

Правила:
- Используем dataclasses для immutability
- Модели не знают о HTTP (чистая бизнес-логика)
- Разбор внешних данных терпимый: мусор отбрасывается, а не роняет цикл
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .enums import Severity, SyncAction


def _as_bool(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True, slots=True)
class BlockRule:
    """Правило блокировки из блоклиста: несколько доменов с общими настройками."""

    domains: Tuple[str, ...]
    severity: Severity = Severity.NONE
    reject_media: bool = False
    reject_reports: bool = False
    reason: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "BlockRule":
        """Разбирает одну запись domain_blocks из JSON."""
        domains = raw.get("domains")
        if not isinstance(domains, list):
            domains = []
        return cls(
            domains=tuple(d for d in domains if isinstance(d, str)),
            severity=Severity.parse(raw.get("severity")),
            reject_media=_as_bool(raw.get("reject_media")),
            reject_reports=_as_bool(raw.get("reject_reports")),
            reason=_as_str(raw.get("reason")),
        )


@dataclass(frozen=True, slots=True)
class DomainBlock:
    """Желаемая блокировка одного домена."""

    domain: str
    severity: Severity = Severity.NONE
    reject_media: bool = False
    reject_reports: bool = False
    public_comment: str = ""

    def differs_from(self, other: "DomainBlock") -> bool:
        """Отличаются ли изменяемые поля (домен - ключ, не сравнивается)."""
        return (
            self.severity != other.severity
            or self.reject_media != other.reject_media
            or self.reject_reports != other.reject_reports
            or self.public_comment != other.public_comment
        )

    def to_form(self, include_domain: bool = True) -> Dict[str, str]:
        """Form-данные для POST/PUT запросов admin API."""
        form = {}
        if include_domain:
            form["domain"] = self.domain
        form["severity"] = self.severity.value
        form["reject_media"] = "true" if self.reject_media else "false"
        form["reject_reports"] = "true" if self.reject_reports else "false"
        form["public_comment"] = self.public_comment
        return form


@dataclass(frozen=True, slots=True)
class RemoteDomainBlock:
    """Блокировка домена, хранящаяся в Mastodon."""

    id: str
    block: DomainBlock

    @property
    def domain(self) -> str:
        return self.block.domain

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "RemoteDomainBlock":
        """Разбирает элемент ответа GET /api/v1/admin/domain_blocks.

        Raises:
            ValueError: если нет id или domain
        """
        if not isinstance(item, dict):
            raise ValueError(f"expected an object, got {type(item).__name__}")
        block_id = item.get("id")
        domain = item.get("domain")
        if block_id is None or not isinstance(domain, str) or not domain:
            raise ValueError(f"domain block without id/domain: {item!r}")
        return cls(
            id=str(block_id),
            block=DomainBlock(
                domain=domain,
                severity=Severity.parse(item.get("severity")),
                reject_media=_as_bool(item.get("reject_media")),
                reject_reports=_as_bool(item.get("reject_reports")),
                public_comment=_as_str(item.get("public_comment")),
            ),
        )


@dataclass(frozen=True, slots=True)
class Mutation:
    """Одно изменение, которое нужно применить к Mastodon."""

    action: SyncAction
    domain: str
    block: Optional[DomainBlock] = None
    remote_id: Optional[str] = None


@dataclass(frozen=False, slots=True)
class SyncReport:
    """Итог одного цикла синхронизации."""

    created: int = 0
    updated: int = 0
    deleted: int = 0
    unchanged: int = 0
    dry_run: bool = False
    planned: list[Mutation] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return self.created + self.updated + self.deleted

    def record(self, action: SyncAction) -> None:
        if action is SyncAction.CREATE:
            self.created += 1
        elif action is SyncAction.UPDATE:
            self.updated += 1
        else:
            self.deleted += 1

    def summary(self) -> str:
        """Короткая строка для логов."""
        prefix = "[dry run] " if self.dry_run else ""
        return (
            f"{prefix}created={self.created} updated={self.updated} "
            f"deleted={self.deleted} unchanged={self.unchanged}"
        )
