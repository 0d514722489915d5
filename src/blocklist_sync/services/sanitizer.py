"""
Санитизация правил блоклиста.

Правила:
- Невалидные домены (без точки, с пробелами, с точкой в начале или конце) отбрасываются молча
- Дубликаты доменов удаляются, побеждает правило, объявленное позже
- Правило без единого выжившего домена удаляется целиком
- Неизвестная строгость превращается в 'none'
- reject_media/reject_reports по умолчанию False
"""
from dataclasses import replace
from typing import Iterable, List, Set

from blocklist_sync.domain import BlockRule, Severity


def normalize_domain(domain: str) -> str:
    return domain.strip().lower()


def is_valid_domain(domain: str) -> bool:
    if "." not in domain or domain.startswith(".") or domain.endswith("."):
        return False
    return not any(ch.isspace() for ch in domain)


def sanitize(rules: Iterable[BlockRule]) -> List[BlockRule]:
    """Возвращает канонический список правил с уникальными доменами."""
    used: Set[str] = set()
    result: List[BlockRule] = []

    for rule in reversed(list(rules)):
        domains = []
        for raw in rule.domains:
            domain = normalize_domain(raw)
            if not is_valid_domain(domain) or domain in used:
                continue
            used.add(domain)
            domains.append(domain)

        if not domains:
            continue

        result.append(
            replace(
                rule,
                domains=tuple(domains),
                severity=Severity.parse(str(rule.severity)),
            )
        )

    result.reverse()
    return result
