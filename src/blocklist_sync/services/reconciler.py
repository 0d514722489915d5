"""
Сверка желаемого и текущего состояния блокировок.

Изменения применяются строго по одному: следующий запрос уходит только после
успеха предыдущего. Первая же ошибка прерывает цикл, уже применённое не
откатывается - следующий цикл перечитает состояние и доделает остальное.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from blocklist_sync.core.types import DomainName
from blocklist_sync.domain import (
    DomainBlock,
    MastodonApiError,
    Mutation,
    RemoteDomainBlock,
    RemoteMutationError,
    SyncAction,
    SyncReport,
)
from blocklist_sync.services.mastodon_client import MastodonClient


def plan(desired: Iterable[DomainBlock], current: Mapping[DomainName, RemoteDomainBlock]) -> List[Mutation]:
    """Вычисляет минимальный набор изменений.

    Создания и обновления идут в порядке desired, удаления - в конце.
    `current` не изменяется: работаем с его копией.
    """
    remaining: Dict[DomainName, RemoteDomainBlock] = dict(current)
    mutations: List[Mutation] = []

    for block in desired:
        existing = remaining.pop(block.domain, None)
        if existing is None:
            mutations.append(Mutation(SyncAction.CREATE, block.domain, block=block))
        elif block.differs_from(existing.block):
            mutations.append(Mutation(SyncAction.UPDATE, block.domain, block=block, remote_id=existing.id))

    # Всё, что осталось, больше не нужно
    for domain, existing in remaining.items():
        mutations.append(Mutation(SyncAction.DELETE, domain, remote_id=existing.id))

    return mutations


class Reconciler:
    """Применяет изменения к Mastodon."""

    def __init__(self, client: MastodonClient, dry_run: bool = False, logger: Optional[logging.Logger] = None):
        self.client = client
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)

    async def reconcile(
        self, desired: List[DomainBlock], current: Mapping[DomainName, RemoteDomainBlock]
    ) -> SyncReport:
        """Сверяет состояние и применяет изменения.

        Raises:
            RemoteMutationError: первое же неудачное изменение
        """
        mutations = plan(desired, current)
        report = await self.apply(mutations)
        report.unchanged = len(desired) - report.created - report.updated
        return report

    async def apply(self, mutations: List[Mutation]) -> SyncReport:
        report = SyncReport(dry_run=self.dry_run)

        for mutation in mutations:
            self.logger.info(f"{mutation.action.verb} domain block for '{mutation.domain}'...")
            if self.dry_run:
                report.planned.append(mutation)
                report.record(mutation.action)
                continue

            try:
                await self._execute(mutation)
            except MastodonApiError as e:
                raise RemoteMutationError(mutation.action, mutation.domain, e) from e
            report.record(mutation.action)

        return report

    async def _execute(self, mutation: Mutation) -> None:
        if mutation.action is SyncAction.CREATE:
            await self.client.create_domain_block(mutation.block)
        elif mutation.action is SyncAction.UPDATE:
            await self.client.update_domain_block(mutation.remote_id, mutation.block)
        else:
            await self.client.delete_domain_block(mutation.remote_id)
