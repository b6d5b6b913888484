# site_shots/checker/observers.py
"""
Passive page listeners that collect console and network problems for one job.
"""
from __future__ import annotations

from typing import Any, List, Sequence, Tuple

__all__ = [
    "IGNORED_CONSOLE_PATTERNS",
    "IGNORED_NETWORK_PATTERNS",
    "ConsoleObserver",
    "NetworkObserver",
]

#: benign third-party console noise
IGNORED_CONSOLE_PATTERNS: Tuple[str, ...] = (
    "Failed to load resource: the server responded with a status of 401",
    "Failed to load resource: the server responded with a status of 403",
    "Content Security Policy",
    "CSP",
)

#: analytics, ads and CAPTCHA vendors
IGNORED_NETWORK_PATTERNS: Tuple[str, ...] = (
    "google-analytics.com",
    "googletagmanager.com",
    "analytics.google.com",
    "doubleclick.net",
    "facebook.com",
    "facebook.net",
    "linkedin.com",
    "twitter.com",
    "google.com/ccm",
    "ads.linkedin.com",
    "recaptcha",
    "csp.withgoogle.com",
)


def _matches(text: str, patterns: Sequence[str]) -> bool:
    return any(p in text for p in patterns)


class ConsoleObserver:
    """Records error-level console messages and uncaught page errors."""

    def __init__(self, ignore: Sequence[str] = IGNORED_CONSOLE_PATTERNS) -> None:
        self.ignore = tuple(ignore)
        self.findings: List[str] = []

    def attach(self, page: Any) -> None:
        page.on("console", self.on_console)
        page.on("pageerror", self.on_page_error)

    def on_console(self, message: Any) -> None:
        if message.type == "error":
            self._record(message.text)

    def on_page_error(self, error: Any) -> None:
        self._record(getattr(error, "message", None) or str(error))

    def _record(self, text: str) -> None:
        if not _matches(text, self.ignore):
            self.findings.append(text)


class NetworkObserver:
    """Records HTTP responses >= 400 and transport-level request failures."""

    def __init__(self, ignore: Sequence[str] = IGNORED_NETWORK_PATTERNS) -> None:
        self.ignore = tuple(ignore)
        self.findings: List[str] = []

    def attach(self, page: Any) -> None:
        page.on("response", self.on_response)
        page.on("requestfailed", self.on_request_failed)

    def on_response(self, response: Any) -> None:
        if response.status >= 400 and not _matches(response.url, self.ignore):
            self.findings.append(f"{response.status} {response.url}")

    def on_request_failed(self, request: Any) -> None:
        if not _matches(request.url, self.ignore):
            self.findings.append(f"Failed: {request.url}")
