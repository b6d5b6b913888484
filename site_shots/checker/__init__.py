# File: site_shots/checker/__init__.py
"""site_shots.checker: Проверка одной страницы в браузере и снятие скриншотов."""

from site_shots.checker.models import Artifact, PageResult
from site_shots.checker.worker import PageChecker

__all__ = ["Artifact", "PageResult", "PageChecker"]
