# File: site_shots/utils.py
"""site_shots.utils: Утилитарные функции для имён файлов, slug'ов URL и отметок времени."""

from __future__ import annotations

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Optional, Sequence, Union
from urllib.parse import urlsplit

from site_shots.logger import logger

__all__: Sequence[str] = (
    "url_to_slug",
    "device_to_slug",
    "screenshot_filename",
    "generate_timestamp",
    "format_duration",
    "make_run_dir",
)

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_DEVICE_SLUG_RE = re.compile(r"[^a-z0-9]+")


def url_to_slug(url: str) -> str:
    """Превращает URL в slug для имени файла.

    Примеры:
      https://example.com/          -> example-com-home
      https://example.com/blog/post -> example-com-blog-post
      https://app.site.com/login    -> app-site-com-login
    """
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
    except ValueError:
        host = None
    if not host:
        slug = _NON_ALNUM_RE.sub("-", url)
        logger.debug("URL slug fallback: %s -> %s", url, slug)
        return slug

    domain = host.replace(".", "-")
    path = parsed.path
    if path in ("", "/"):
        path = "home"
    else:
        # ровно по одному слэшу с каждого края
        if path.startswith("/"):
            path = path[1:]
        if path.endswith("/"):
            path = path[:-1]
        path = path.replace("/", "-")
    return f"{domain}-{path}"


def device_to_slug(device: str) -> str:
    """'iPhone 13' -> 'iphone-13', 'desktop' -> 'desktop'."""
    return _DEVICE_SLUG_RE.sub("-", device.lower())


def screenshot_filename(
    url: str,
    device: str,
    part_index: Optional[int] = None,
    part_count: Optional[int] = None,
) -> str:
    """Имя PNG-файла: `{url}.{device}.png` или `{url}.{device}.part{i}of{n}.png`."""
    stem = f"{url_to_slug(url)}.{device_to_slug(device)}"
    if part_index is None:
        return f"{stem}.png"
    return f"{stem}.part{part_index}of{part_count}.png"


def generate_timestamp(now: Optional[datetime] = None) -> str:
    """Имя каталога запуска в формате YYYY-MM-DD-HHmm."""
    return (now or datetime.now()).strftime("%Y-%m-%d-%H%M")


def format_duration(ms: float) -> str:
    """Миллисекунды -> секунды с одним знаком после запятой (половина округляется вверх)."""
    return str(Decimal(ms / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def make_run_dir(root: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """Создаёт каталог `<root>/<timestamp>` (с суффиксом -2, -3... если он уже есть)."""
    base = Path(root).expanduser() / generate_timestamp(now)
    candidate = base
    n = 1
    while candidate.exists():
        n += 1
        candidate = base.with_name(f"{base.name}-{n}")
    candidate.mkdir(parents=True)
    logger.debug("Created output directory %s", candidate)
    return candidate
