# File: site_shots/report/__init__.py
"""site_shots.report: Сохранение итогов запуска в JSON и HTML."""

from site_shots.report.html_report import render_html
from site_shots.report.json_report import render_json

__all__ = ["render_json", "render_html"]
