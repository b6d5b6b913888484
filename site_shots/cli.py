# === FILE: site_shots/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SiteShots через командную строку.

Команды:
  run       Проверить страницы из конфига, снять скриншоты и вывести итоговый отчёт
  config    Показать развёрнутый список задач (URL × устройство) без запуска браузера

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: config.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда run опции:
  --output DIR        Корневой каталог для скриншотов (default: output)
  --concurrency INT   Сколько страниц проверять одновременно (default: 5)
  --browser NAME      chromium | firefox | webkit
  --headed            Показывать окно браузера
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл

Код выхода 1, если хотя бы одна проверка упала или конфиг некорректен.

Пример:
  site_shots --config config.yaml run --json report.json --html report.html
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from site_shots import __version__
from site_shots.aggregator import format_report
from site_shots.config import RunConfig, load_config
from site_shots.engine import start_run
from site_shots.errors import ConfigurationError
from site_shots.jobs import expand_run_config
from site_shots.logger import init_logging
from site_shots.report.html_report import render_html
from site_shots.report.json_report import render_json
from site_shots.scheduler import DEFAULT_CONCURRENCY

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteShots, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='config.yaml',
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteShots CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load_run_config(ctx) -> RunConfig:
    """Загружает конфиг группы: только когда команда действительно выполняется."""
    try:
        return load_config(ctx.obj['config_path'])
    except ConfigurationError as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--output', '-o', 'output_root',
    default='output',
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Корневой каталог для скриншотов'
)
@click.option(
    '--concurrency', '-w', 'concurrency',
    default=DEFAULT_CONCURRENCY,
    show_default=True,
    type=click.IntRange(min=1),
    help='Размер пачки одновременных проверок'
)
@click.option(
    '--browser', 'browser_name',
    default='chromium',
    show_default=True,
    type=click.Choice(['chromium', 'firefox', 'webkit']),
    help='Движок браузера'
)
@click.option('--headed', is_flag=True, help='Запускать браузер с окном')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.pass_context
def run(ctx, output_root, concurrency, browser_name, headed, json_output, html_output):
    """Проверить страницы и сохранить скриншоты."""
    cfg = _load_run_config(ctx)
    try:
        report = asyncio.run(
            start_run(
                cfg,
                output_root=output_root,
                concurrency=concurrency,
                browser_name=browser_name,
                headless=not headed,
            )
        )
    except ConfigurationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    except Exception as e:
        print_error(f'Fatal error: {e}')

    click.echo(format_report(report))

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, html_output)
            click.echo(f'HTML report: {saved_html}')
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    sys.exit(report.exit_code)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать развёрнутые задачи в JSON."""
    cfg = _load_run_config(ctx)
    jobs = [
        {'url': job.url, 'device': job.device, 'config': job.config.model_dump(mode='json', by_alias=True)}
        for job in expand_run_config(cfg)
    ]
    click.echo(json.dumps(jobs, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    cli()
