# File: site_shots/logger.py
"""Логирование SiteShots.

Весь запуск пишет в один именованный логгер ``SiteShots``: stdout и, если задан
``--log-file``, файл с ротацией. Сообщения о конкретной проверке идут через
:func:`job_logger`, который подставляет ``url [device]`` перед текстом::

    from site_shots.logger import job_logger, logger

    logger.info("Found %d job(s) to process", len(jobs))
    job_logger(job.url, job.device).warning("FAIL: %s", reason)
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Final, List, MutableMapping, Tuple, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SiteShots"
_LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


class JobLogAdapter(logging.LoggerAdapter):
    """Добавляет ``url [device]`` к каждому сообщению одной проверки."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.extra['url']} [{self.extra['device']}] {msg}", kwargs


def _build_handlers(log_file: str | Path | None, log_format: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=_LOG_FILE_MAX_BYTES,
                backupCount=_LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Пересобирает обработчики логгера SiteShots.

    Вызывается при импорте (stdout, INFO) и ещё раз из CLI с опциями
    ``--log-level``/``--log-file``/``--log-format``. Прежние обработчики
    закрываются, поэтому файл лога не остаётся открытым после перенастройки.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.setLevel(level)
    lg.propagate = False
    return lg


def job_logger(url: str, device: str) -> JobLogAdapter:
    return JobLogAdapter(logging.getLogger(_LOGGER_NAME), {"url": url, "device": device})


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "job_logger", "JobLogAdapter"]
