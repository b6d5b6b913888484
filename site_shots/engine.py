# File: site_shots/engine.py
"""site_shots.engine: Orchestration layer - браузер, каталог запуска, пачки задач и итоговый отчёт."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Union

from playwright.async_api import async_playwright

from site_shots.aggregator import RunReport
from site_shots.checker.worker import PageChecker
from site_shots.config import RunConfig
from site_shots.errors import ConfigurationError
from site_shots.jobs import expand_run_config
from site_shots.logger import logger
from site_shots.scheduler import DEFAULT_CONCURRENCY, run_batches
from site_shots.utils import make_run_dir

__all__ = ["BrowserName", "start_run"]

BrowserName = Literal["chromium", "firefox", "webkit"]


async def start_run(
    config: RunConfig,
    *,
    output_root: Union[str, Path] = "output",
    concurrency: int = DEFAULT_CONCURRENCY,
    browser_name: BrowserName = "chromium",
    headless: bool = True,
) -> RunReport:
    """
    Запускает все проверки конфига и возвращает RunReport.

    Ошибки отдельных страниц попадают в результаты; наружу выходят только
    ошибки конфигурации и проблемы запуска браузера.
    """
    jobs = expand_run_config(config)
    if not jobs:
        raise ConfigurationError("No jobs to run: every page has an empty device list")

    unique_urls = len({job.url for job in jobs})
    logger.info("Found %d page(s) × devices = %d job(s) to process", unique_urls, len(jobs))

    output_dir = make_run_dir(output_root)

    async with async_playwright() as p:
        logger.debug("Launching %s (headless=%s)", browser_name, headless)
        browser = await getattr(p, browser_name).launch(headless=headless)
        try:
            checker = PageChecker(browser, output_dir, devices=p.devices)
            outcome = await run_batches(jobs, checker, width=concurrency)
        finally:
            await browser.close()
            logger.debug("Browser closed")

    report = RunReport(
        results=outcome.results,
        output_dir=output_dir,
        aborted_by=outcome.aborted_by,
        skipped=outcome.skipped,
    )
    s = report.summary
    logger.info("Завершено: %d проверено, %d успешно, %d с ошибками", s.checked, s.passed, s.failed)
    return report
