# === FILE: site_shots/checker/worker.py ===
"""
Проверка одной задачи (URL × устройство) в изолированном контексте браузера.

Последовательность:
  1. контекст с профилем устройства, слушатели console/pageerror/response/requestfailed;
  2. навигация; таймаут, исключение или статус != 200 завершают проверку;
  3. ожидание waitFor, прокрутка, пауза, сбор ошибок консоли и сети, обязательные селекторы;
  4. скриншоты (даже если на шаге 3 были ошибки);
  5. закрытие контекста на любом пути выхода.
"""
from __future__ import annotations

import time
from pathlib import Path
from typing import Any, List, Mapping, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from site_shots.checker.devices import resolve_device
from site_shots.checker.models import PageResult
from site_shots.checker.observers import ConsoleObserver, NetworkObserver
from site_shots.checker.screenshots import capture_screenshots
from site_shots.config import PageConfig
from site_shots.errors import CaptureError, NavigationError
from site_shots.jobs import PageJob
from site_shots.logger import job_logger
from site_shots.utils import format_duration

__all__ = ("PageChecker", "SCROLL_PAGE_JS")

SCROLL_PAGE_JS = """async ([distance, interval]) => {
    await new Promise((resolve) => {
        let totalHeight = 0;
        const timer = setInterval(() => {
            const scrollHeight = document.body.scrollHeight;
            window.scrollBy(0, distance);
            totalHeight += distance;
            if (totalHeight >= scrollHeight) {
                clearInterval(timer);
                window.scrollTo(0, 0);
                resolve();
            }
        }, interval);
    });
}"""


class PageChecker:
    """Запускает проверку страниц на общем экземпляре браузера."""

    WAIT_FOR_TIMEOUT_MS: int = 30_000
    SETTLE_DELAY_MS: int = 5_000
    SLOW_PAGE_MS: int = 5_000
    SCROLL_STEP_PX: int = 100
    SCROLL_INTERVAL_MS: int = 100

    def __init__(
        self,
        browser: Any,
        output_dir: Path | str,
        devices: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        self.browser = browser
        self.output_dir = Path(output_dir)
        self.devices = devices or {}

    async def __call__(self, job: PageJob) -> PageResult:
        return await self.check(job)

    async def check(self, job: PageJob) -> PageResult:
        """Проверяет одну задачу. Исключения не выходят наружу, а становятся ошибками результата."""
        started = time.monotonic()
        errors: List[str] = []
        warnings: List[str] = []
        screenshots: List[str] = []

        log = job_logger(job.url, job.device)
        profile = resolve_device(job.device, self.devices)
        if profile.fallback:
            log.warning("unknown device, falling back to desktop viewport")
            warnings.append(f'Unknown device "{job.device}", used desktop viewport')

        log.debug("checking")
        context = None
        try:
            context = await self.browser.new_context(**profile.options)
            page = await context.new_page()
            console = ConsoleObserver()
            network = NetworkObserver()
            console.attach(page)
            network.attach(page)

            navigation_ms = await self._navigate(page, job.url, job.config)
            await self._post_load_checks(page, job.config, warnings)

            if console.findings:
                errors.append(f"Console errors: {'; '.join(console.findings)}")
            if network.findings:
                errors.append(f"Network failures: {'; '.join(network.findings)}")
            for selector in job.config.required_selectors:
                if await page.query_selector(selector) is None:
                    errors.append(f"Missing selector: {selector}")
            if navigation_ms > self.SLOW_PAGE_MS:
                warnings.append(f"Slow page: {format_duration(navigation_ms)}s")

            try:
                artifacts = await capture_screenshots(
                    page,
                    url=job.url,
                    device=job.device,
                    output_dir=self.output_dir,
                    full_page=job.config.full_page,
                    max_height=job.config.max_screenshot_height,
                )
                screenshots.extend(a.filename for a in artifacts)
            except CaptureError as exc:
                errors.append(str(exc))
        except PlaywrightTimeoutError:
            errors.append("Timeout exceeded")
        except Exception as exc:
            errors.append(str(exc) or type(exc).__name__)
        finally:
            if context is not None:
                try:
                    await context.close()
                except Exception as exc:
                    log.warning("failed to close context: %s", exc)

        result = PageResult(
            url=job.url,
            device=job.device,
            errors=tuple(errors),
            warnings=tuple(warnings),
            duration=int((time.monotonic() - started) * 1000),
            screenshots=tuple(screenshots),
        )
        if result.success:
            log.info("OK (%ss)", format_duration(result.duration))
        else:
            log.warning("FAIL: %s", " | ".join(result.errors))
        return result

    async def _navigate(self, page: Any, url: str, config: PageConfig) -> float:
        """Возвращает время навигации в мс; неуспешный статус - NavigationError."""
        nav_started = time.monotonic()
        response = await page.goto(url, wait_until=config.wait_until, timeout=config.timeout_ms)
        navigation_ms = (time.monotonic() - nav_started) * 1000

        status = response.status if response is not None else None
        if status != 200:
            raise NavigationError(f"Status {status if status else 'unknown'}")
        return navigation_ms

    async def _post_load_checks(
        self, page: Any, config: PageConfig, warnings: List[str]
    ) -> None:
        for selector in config.wait_for:
            try:
                await page.wait_for_selector(
                    selector, state="visible", timeout=self.WAIT_FOR_TIMEOUT_MS
                )
            except PlaywrightError:
                warnings.append(
                    f"waitFor selector not visible within {self.WAIT_FOR_TIMEOUT_MS // 1000}s: {selector}"
                )

        if config.scroll_page:
            await page.evaluate(SCROLL_PAGE_JS, [self.SCROLL_STEP_PX, self.SCROLL_INTERVAL_MS])

        await page.wait_for_timeout(self.SETTLE_DELAY_MS)
