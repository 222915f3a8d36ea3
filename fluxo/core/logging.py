"""
Structured logging configuration using loguru.

Every record carries the active account store, so logs from a local-store
deployment and an SQL deployment can be told apart.
"""
import sys
from loguru import logger
from fluxo.core.config import settings


def _default_level() -> str:
    if settings.LOG_LEVEL:
        return settings.LOG_LEVEL.upper()
    return "DEBUG" if settings.ENVIRONMENT == "development" else "INFO"


logger.remove()
logger.configure(extra={"store": settings.ACCOUNT_STORE})

logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <magenta>{extra[store]}</magenta> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=_default_level(),
    colorize=True,
)

# Rotating file sink in production
if settings.ENVIRONMENT == "production" and settings.LOG_FILE:
    logger.add(
        settings.LOG_FILE,
        rotation="500 MB",
        retention="10 days",
        compression="zip",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[store]} | {name}:{function}:{line} - {message}",
        level="INFO",
    )

__all__ = ["logger"]
