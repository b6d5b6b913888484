# File: site_shots/errors.py
"""site_shots.errors: Иерархия исключений SiteShots."""

from __future__ import annotations

__all__ = ["SiteShotsError", "ConfigurationError", "NavigationError", "CaptureError"]


class SiteShotsError(Exception):
    """Базовое исключение проекта."""


class ConfigurationError(SiteShotsError, ValueError):
    """Конфиг отсутствует, не читается или не проходит валидацию. Прерывает весь запуск."""


class NavigationError(SiteShotsError):
    """Страница не загрузилась со статусом 200. Проваливает только свою задачу."""


class CaptureError(SiteShotsError):
    """Ошибка снятия, нарезки или записи скриншота."""
