"""
Константы приложения.
"""

DOMAIN_BLOCKS_PATH = "/api/v1/admin/domain_blocks"

# Максимальный размер страницы admin API
DOMAIN_BLOCKS_PAGE_LIMIT = 200

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_LOG_LEVEL = "info"
DEFAULT_TASK_INTERVAL = "5m"
DEFAULT_REQUEST_TIMEOUT = "30s"
