# File: site_shots/aggregator.py
"""site_shots.aggregator: Итоги запуска и текстовый отчёт."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from site_shots.checker.models import PageResult

__all__ = ["RunSummary", "RunReport", "summarize", "format_report"]

_RULE = "=" * 60


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Счётчики и выборки упавших/предупреждённых результатов (в исходном порядке)."""

    checked: int
    passed: int
    failed: int
    screenshot_files: int
    failures: List[PageResult] = field(default_factory=list)
    warned: List[PageResult] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed > 0 else 0


def summarize(results: Sequence[PageResult]) -> RunSummary:
    """Чистая функция над итоговыми результатами."""
    failures = [r for r in results if not r.success]
    return RunSummary(
        checked=len(results),
        passed=len(results) - len(failures),
        failed=len(failures),
        screenshot_files=sum(len(r.screenshots) for r in results),
        failures=failures,
        warned=[r for r in results if r.warnings],
    )


@dataclass(slots=True)
class RunReport:
    """Результаты одного запуска вместе с каталогом скриншотов."""

    results: List[PageResult] = field(default_factory=list)
    output_dir: Union[Path, str, None] = None
    aborted_by: Optional[PageResult] = None
    skipped: int = 0

    @property
    def aborted(self) -> bool:
        return self.aborted_by is not None

    @property
    def summary(self) -> RunSummary:
        return summarize(self.results)

    @property
    def exit_code(self) -> int:
        return self.summary.exit_code

    def to_dict(self) -> Dict[str, Any]:
        s = self.summary
        return {
            "output_dir": str(self.output_dir) if self.output_dir is not None else None,
            "summary": {
                "checked": s.checked,
                "passed": s.passed,
                "failed": s.failed,
                "screenshot_files": s.screenshot_files,
            },
            "aborted": self.aborted,
            "aborted_by": (
                {"url": self.aborted_by.url, "device": self.aborted_by.device}
                if self.aborted_by
                else None
            ),
            "skipped": self.skipped,
            "results": [r.to_dict() for r in self.results],
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _itemize(title: str, results: Sequence[PageResult], attr: str) -> List[str]:
    lines = [title]
    for r in results:
        lines.append(f"- {r.url} [{r.device}]")
        lines.extend(f"  → {message}" for message in getattr(r, attr))
    lines.append("")
    return lines


def format_report(report: RunReport) -> str:
    """Человекочитаемый итоговый блок для консоли."""
    s = report.summary
    lines = [
        _RULE,
        "SUMMARY",
        _RULE,
        "",
        f"Jobs checked: {s.checked}",
        f"Passed: {s.passed}",
        f"Failed: {s.failed}",
        f"Screenshot files: {s.screenshot_files}",
        "",
    ]
    if report.aborted_by is not None:
        lines += [
            f"Aborted: critical page failed (abortIfFail): "
            f"{report.aborted_by.url} [{report.aborted_by.device}], {report.skipped} job(s) not run",
            "",
        ]
    if s.failures:
        lines += _itemize("Failures:", s.failures, "errors")
    if s.warned:
        lines += _itemize("Warnings:", s.warned, "warnings")
    if report.output_dir is not None:
        lines += ["Screenshots saved to:", f"   {report.output_dir}", ""]
    return "\n".join(lines)
