# File: site_shots/report/html_report.py
"""site_shots.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_shots.aggregator import RunReport

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    report: RunReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект RunReport.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с шаблоном report.html.j2 (по умолчанию встроенная).

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    # ссылки на скриншоты относительно самого отчёта
    shots_prefix = ""
    if report.output_dir is not None:
        shots_prefix = os.path.relpath(Path(report.output_dir).resolve(), output_path.parent.resolve())

    context: dict[str, Any] = {
        "summary": report.summary,
        "results": report.results,
        "aborted_by": report.aborted_by,
        "skipped": report.skipped,
        "output_dir": report.output_dir,
        "shots_prefix": Path(shots_prefix).as_posix() if shots_prefix else "",
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
