"""
Разворачивание правил в блокировки отдельных доменов.
"""
from typing import Iterable, List

from blocklist_sync.domain import BlockRule, DomainBlock


def translate(rules: Iterable[BlockRule]) -> List[DomainBlock]:
    """Одна DomainBlock на каждый домен каждого правила."""
    return [
        DomainBlock(
            domain=domain,
            severity=rule.severity,
            reject_media=rule.reject_media,
            reject_reports=rule.reject_reports,
            public_comment=rule.reason,
        )
        for rule in rules
        for domain in rule.domains
    ]
