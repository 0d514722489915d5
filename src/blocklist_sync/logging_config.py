"""
Настройка логирования.
"""
import logging

from blocklist_sync.config import Config

LOGGER_NAME = "blocklist_sync"

DEV_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
PROD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Config) -> logging.Logger:
    """Настраивает корневой обработчик и возвращает логгер приложения."""
    if config.is_dev:
        logging.basicConfig(format=DEV_FORMAT, datefmt="%H:%M:%S", level=logging.DEBUG, force=True)
        logger = logging.getLogger(LOGGER_NAME)
        logger.warning(
            "⚠️ The service was started in development mode. "
            "Please change the 'ENVIRONMENT' variable to 'prod' in production!"
        )
        return logger

    level = logging.getLevelName(config.log_level.strip().upper())
    invalid = not isinstance(level, int)
    if invalid:
        level = logging.INFO
    logging.basicConfig(format=PROD_FORMAT, level=level, force=True)

    logger = logging.getLogger(LOGGER_NAME)
    if invalid:
        logger.warning(f"⚠️ An invalid log level '{config.log_level}' was provided. Using the 'info' fallback value.")
    return logger
