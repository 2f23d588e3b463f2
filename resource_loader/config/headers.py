from typing import Dict, Mapping, Optional

from resource_loader.config.settings import Settings, get_settings


def get_headers(settings: Optional[Settings] = None) -> Dict[str, str]:
    """Базовые заголовки сессии транспорта."""
    settings = settings or get_settings()
    return {
        "Accept": settings.ACCEPT,
        "User-Agent": settings.USER_AGENT,
    }


def merge_header_fields(
    base: Optional[Mapping[str, str]],
    override: Optional[Mapping[str, str]],
) -> Dict[str, str]:
    """
    Склеивает два набора заголовков. override побеждает при совпадении ключа
    (без учета регистра), написание ключа берется из override.
    Порядок: сначала ключи base, затем новые ключи override.
    """
    merged: Dict[str, str] = {}
    keys_by_lower: Dict[str, str] = {}

    for key, value in (base or {}).items():
        merged[key] = value
        keys_by_lower[key.lower()] = key

    for key, value in (override or {}).items():
        existing = keys_by_lower.get(key.lower())
        if existing is not None:
            del merged[existing]
        merged[key] = value
        keys_by_lower[key.lower()] = key

    return merged
