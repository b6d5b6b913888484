# File: site_shots/checker/screenshots.py
"""site_shots.checker.screenshots: Снятие скриншотов с нарезкой высоких страниц на части.

Если страница выше ``max_height``, снимается один полноразмерный PNG, который затем
режется Pillow на ``ceil(H / max_height)`` горизонтальных полос одинаковой высоты
(последняя может быть короче). Промежуточный файл удаляется всегда.
"""

from __future__ import annotations

import asyncio
import math
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Optional

from PIL import Image

from site_shots.checker.models import Artifact
from site_shots.errors import CaptureError
from site_shots.logger import logger
from site_shots.utils import screenshot_filename

__all__ = ["Band", "plan_bands", "measure_page_height", "capture_screenshots"]

PAGE_HEIGHT_JS = """() => Math.max(
    document.body.scrollHeight,
    document.body.offsetHeight,
    document.documentElement.clientHeight,
    document.documentElement.scrollHeight,
    document.documentElement.offsetHeight
)"""


@dataclass(frozen=True, slots=True)
class Band:
    """Горизонтальная полоса [start, end) в CSS-пикселях; index начинается с 1."""

    index: int
    start: int
    end: int

    @property
    def height(self) -> int:
        return self.end - self.start


def plan_bands(total_height: int, max_height: int) -> List[Band]:
    """Делит высоту на ceil(H/M) смежных полос выровненной высоты ceil(H/n)."""
    if total_height <= 0 or max_height <= 0:
        raise ValueError("heights must be positive")
    num_parts = math.ceil(total_height / max_height)
    part_height = math.ceil(total_height / num_parts)
    return [
        Band(i + 1, i * part_height, min((i + 1) * part_height, total_height))
        for i in range(num_parts)
    ]


async def measure_page_height(page: Any) -> int:
    """Максимум из нескольких DOM-метрик высоты документа."""
    return int(await page.evaluate(PAGE_HEIGHT_JS))


_PIXEL_LIMIT_LOCK = threading.Lock()


@contextmanager
def _unlimited_pixels() -> Iterator[None]:
    """Снимает лимит Pillow MAX_IMAGE_PIXELS (open и crop) для растра, снятого нами же."""
    with _PIXEL_LIMIT_LOCK:
        saved = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = None
        try:
            yield
        finally:
            Image.MAX_IMAGE_PIXELS = saved


def _crop_bands(source: Path, bands: List[Band], total_height: int, targets: List[Path]) -> None:
    with _unlimited_pixels(), Image.open(source) as full:
        full.load()
        width, raster_height = full.size
        # растр может быть масштабирован (deviceScaleFactor), переводим CSS px в пиксели
        scale = raster_height / total_height
        for band, target in zip(bands, targets):
            top = round(band.start * scale)
            bottom = raster_height if band.end == total_height else round(band.end * scale)
            full.crop((0, top, width, bottom)).save(target, format="PNG")


async def capture_screenshots(
    page: Any,
    *,
    url: str,
    device: str,
    output_dir: Path,
    full_page: bool,
    max_height: Optional[int],
) -> List[Artifact]:
    """
    Снимает страницу и возвращает упорядоченный список артефактов.

    Один файл без суффикса части, если full_page выключен, лимита нет или страница
    не выше лимита; иначе - `partIofN` файлы сверху вниз.
    """
    output_dir = Path(output_dir)
    try:
        height = await measure_page_height(page) if full_page and max_height else 0
        if not full_page or not max_height or height <= max_height:
            filename = screenshot_filename(url, device)
            await page.screenshot(path=str(output_dir / filename), full_page=full_page)
            return [Artifact(filename)]

        bands = plan_bands(height, max_height)
        logger.debug("Splitting %s [%s]: %dpx into %d parts", url, device, height, len(bands))
        artifacts = [
            Artifact(screenshot_filename(url, device, b.index, len(bands)), b.index, len(bands))
            for b in bands
        ]
        temp_path = output_dir / f".full-{uuid.uuid4().hex}.png"
        try:
            await page.screenshot(path=str(temp_path), full_page=True)
            await asyncio.to_thread(
                _crop_bands, temp_path, bands, height, [output_dir / a.filename for a in artifacts]
            )
        finally:
            temp_path.unlink(missing_ok=True)
        return artifacts
    except Exception as exc:
        raise CaptureError(f"Screenshot failed: {exc}") from exc
