import logging
from typing import Optional, Union

from resource_loader.config.settings import Settings, get_settings


def configure_logging(level: Optional[Union[int, str]] = None, settings: Optional[Settings] = None) -> None:
    """Настройка root-логгера для скриптов. Библиотечный код сам логгеры не настраивает."""
    settings = settings or get_settings()
    resolved = level if level is not None else settings.LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
    logging.basicConfig(level=resolved, format=settings.LOG_FORMAT)
