"""
Type aliases для улучшения читаемости кода.
"""

from typing import NewType

# Доменное имя (ключ блокировки)
DomainName = NewType("DomainName", str)

# Идентификатор блокировки, выданный Mastodon
BlockId = NewType("BlockId", str)

# Секунды
Seconds = NewType("Seconds", float)
