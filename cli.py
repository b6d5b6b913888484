# cli.py

"""
Запуск SiteShots из рабочей копии без установки пакета.

Пример запуска:
    python cli.py --config config.yaml run --json reports/report.json --html reports/report.html
"""
from site_shots.cli import cli


if __name__ == '__main__':
    cli()
