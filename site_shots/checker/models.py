# site_shots/checker/models.py
"""
Data models for the SiteShots page checker.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class Artifact:
    """One screenshot file; part fields are set only for multi-part captures."""

    filename: str
    part_index: Optional[int] = None
    part_count: Optional[int] = None


@dataclass(frozen=True, slots=True)
class PageResult:
    """Outcome of checking one (url, device) job."""

    url: str
    device: str
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    duration: int = 0
    screenshots: Tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "device": self.device,
            "success": self.success,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "duration": self.duration,
            "screenshots": list(self.screenshots),
        }
