# File: site_shots/jobs.py
"""site_shots.jobs: Разворачивает конфиг в плоский список задач (URL × устройство)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from site_shots.config import PageConfig, PageOverride, RunConfig, merge_config
from site_shots.errors import ConfigurationError

__all__ = ["PageJob", "expand_page_jobs", "expand_run_config"]


@dataclass(frozen=True, slots=True)
class PageJob:
    """Одна единица работы: URL, устройство и итоговые настройки страницы."""

    url: str
    device: str
    config: PageConfig


def expand_page_jobs(
    default: PageConfig, pages: Mapping[str, Optional[PageOverride]]
) -> List[PageJob]:
    """
    Возвращает задачи в порядке страниц, а внутри страницы - в порядке устройств.
    Страница с пустым списком устройств не даёт ни одной задачи.
    """
    if not pages:
        raise ConfigurationError("No pages configured")

    jobs: List[PageJob] = []
    for url, override in pages.items():
        resolved = merge_config(default, override)
        jobs.extend(PageJob(url=url, device=device, config=resolved) for device in resolved.devices)
    return jobs


def expand_run_config(config: RunConfig) -> List[PageJob]:
    """То же, что expand_page_jobs, для загруженного RunConfig."""
    return expand_page_jobs(config.default, config.pages)
