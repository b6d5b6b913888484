# File: tests/conftest.py
"""In-memory stand-ins for the Playwright browser/context/page used by the checker."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from PIL import Image
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from site_shots.checker.screenshots import PAGE_HEIGHT_JS
from site_shots.config import PageConfig


@dataclass
class FakeResponse:
    status: int
    url: str = "https://example.com/"


@dataclass
class FakeConsoleMessage:
    type: str
    text: str


@dataclass
class FakePageError:
    message: str


@dataclass
class FakeRequest:
    url: str


@dataclass
class PageScript:
    """What a fake page does when navigated."""

    status: Optional[int] = 200
    events: List[Tuple[str, Any]] = field(default_factory=list)
    goto_error: Optional[BaseException] = None
    visible: Tuple[str, ...] = ()
    present: Tuple[str, ...] = ()
    height: int = 1000
    width: int = 120
    scale: int = 1
    mode: str = "RGB"
    screenshot_error: Optional[BaseException] = None


class FakePage:
    def __init__(self, script: PageScript) -> None:
        self.script = script
        self.handlers: Dict[str, List[Callable[[Any], None]]] = {}
        self.goto_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.waited: List[Tuple[str, Dict[str, Any]]] = []
        self.queried: List[str] = []
        self.evaluated: List[Tuple[str, Any]] = []
        self.screenshots: List[Tuple[str, bool]] = []
        self.timeouts: List[int] = []

    def on(self, event: str, handler: Callable[[Any], None]) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in self.handlers.get(event, []):
            handler(payload)

    async def goto(self, url: str, **kwargs: Any) -> Optional[FakeResponse]:
        self.goto_calls.append((url, kwargs))
        for event, payload in self.script.events:
            self.emit(event, payload)
        if self.script.goto_error is not None:
            raise self.script.goto_error
        if self.script.status is None:
            return None
        return FakeResponse(self.script.status, url)

    async def wait_for_selector(self, selector: str, **kwargs: Any) -> None:
        self.waited.append((selector, kwargs))
        if selector not in self.script.visible:
            raise PlaywrightTimeoutError(f"Timeout {kwargs.get('timeout')}ms exceeded.")

    async def query_selector(self, selector: str) -> Optional[object]:
        self.queried.append(selector)
        return object() if selector in self.script.present else None

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self.evaluated.append((script, arg))
        if script == PAGE_HEIGHT_JS:
            return self.script.height
        return None

    async def wait_for_timeout(self, ms: int) -> None:
        self.timeouts.append(ms)

    async def screenshot(self, *, path: str, full_page: bool = False) -> bytes:
        self.screenshots.append((path, full_page))
        if self.script.screenshot_error is not None:
            raise self.script.screenshot_error
        height = self.script.height if full_page else 50
        image = Image.new(self.script.mode, (self.script.width, height * self.script.scale), "white")
        image.save(path, format="PNG")
        return Path(path).read_bytes()


class FakeContext:
    def __init__(self, page: FakePage, options: Dict[str, Any]) -> None:
        self.page = page
        self.options = options
        self.closed = False

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    """Hands out one FakePage per context, scripted per URL (or a default script)."""

    def __init__(self, scripts: Optional[Dict[str, PageScript]] = None, default: Optional[PageScript] = None):
        self.scripts = scripts or {}
        self.default = default or PageScript()
        self.contexts: List[FakeContext] = []
        self.closed = False

    async def new_context(self, **options: Any) -> FakeContext:
        context = FakeContext(_RoutingPage(self), options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True


class _RoutingPage(FakePage):
    """Picks its script on navigation, by URL."""

    def __init__(self, browser: FakeBrowser) -> None:
        super().__init__(browser.default)
        self._browser = browser

    async def goto(self, url: str, **kwargs: Any) -> Optional[FakeResponse]:
        self.script = self._browser.scripts.get(url, self._browser.default)
        return await super().goto(url, **kwargs)


@pytest.fixture()
def page_config() -> PageConfig:
    """Single-device config with no extra waits."""
    return PageConfig(devices=["desktop"], full_page=True)


@pytest.fixture()
def device_registry() -> Dict[str, Dict[str, Any]]:
    """Small subset of ``playwright.devices``."""
    return {
        "iPhone 13": {
            "viewport": {"width": 390, "height": 664},
            "device_scale_factor": 3,
            "is_mobile": True,
            "has_touch": True,
        },
        "iPad Pro 11": {
            "viewport": {"width": 834, "height": 1194},
            "device_scale_factor": 2,
            "is_mobile": True,
            "has_touch": True,
        },
        "Pixel 5": {
            "viewport": {"width": 393, "height": 727},
            "device_scale_factor": 2.75,
            "is_mobile": True,
            "has_touch": True,
        },
    }
