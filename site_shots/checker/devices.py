# site_shots/checker/devices.py
"""
Resolution of device names into browser context options.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, NamedTuple, Optional

__all__ = ["DeviceProfile", "DESKTOP_VIEWPORT", "SHORTHANDS", "resolve_device"]

DESKTOP_VIEWPORT: Dict[str, int] = {"width": 1280, "height": 800}

#: shorthand name -> Playwright device descriptor name
SHORTHANDS: Dict[str, str] = {
    "mobile": "iPhone 13",
    "tablet": "iPad Pro 11",
}


class DeviceProfile(NamedTuple):
    name: str
    options: Dict[str, Any]
    fallback: bool = False


def _desktop(name: str, fallback: bool = False) -> DeviceProfile:
    return DeviceProfile(name, {"viewport": dict(DESKTOP_VIEWPORT)}, fallback)


def resolve_device(name: str, registry: Optional[Mapping[str, Mapping[str, Any]]] = None) -> DeviceProfile:
    """Map *name* to ``browser.new_context`` kwargs; never raises.

    ``registry`` is normally ``playwright.devices``. Unknown names resolve to the
    desktop viewport with ``fallback=True``.
    """
    registry = registry or {}
    key = name.lower()
    if key == "desktop":
        return _desktop(name)
    descriptor = registry.get(SHORTHANDS[key]) if key in SHORTHANDS else registry.get(name)
    if descriptor is None:
        return _desktop(name, fallback=True)
    return DeviceProfile(name, dict(descriptor))
