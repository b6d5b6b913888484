# === FILE: site_shots/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteShots.
Используется Pydantic для описания схемы и проверки данных.

Формат файла::

    _default:
      fullPage: true
      devices: [desktop, mobile]
      timeoutMs: 30000
    pages:
      https://example.com/: {}
      https://example.com/shop:
        abortIfFail: true
        requiredSelectors: ["#cart"]
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Union
from urllib.parse import urlparse

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from site_shots.errors import ConfigurationError

__all__ = ["PageConfig", "PageOverride", "RunConfig", "WaitUntil", "load_config", "merge_config"]

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]


class PageConfig(BaseModel):
    """Полностью разрешённые настройки одной страницы."""
    model_config = ConfigDict(
        extra="forbid", frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    full_page: bool = Field(True, description="Снимать всю страницу, а не только viewport.")
    devices: Tuple[str, ...] = Field(("desktop", "mobile"), description="Профили устройств.")
    timeout_ms: int = Field(30_000, gt=0, description="Таймаут навигации (мс).")
    required_selectors: Tuple[str, ...] = Field((), description="Селекторы, обязательные в DOM.")
    abort_if_fail: bool = Field(False, description="Остановить запуск, если страница упала.")
    wait_until: WaitUntil = Field("load", description="Событие готовности для навигации.")
    wait_for: Tuple[str, ...] = Field((), description="Селекторы, которых ждём перед снимком.")
    scroll_page: bool = Field(False, description="Прокрутить страницу для lazy-load контента.")
    max_screenshot_height: Optional[int] = Field(
        None, gt=0, description="Максимальная высота одного файла (px), None - без лимита."
    )

    @field_validator("devices", mode="before")
    def _unique_devices(cls, v: Any) -> Any:
        # devices - упорядоченное множество
        if isinstance(v, (list, tuple)):
            return tuple(dict.fromkeys(v))
        return v


class PageOverride(BaseModel):
    """Частичные настройки страницы: заданные поля целиком заменяют значения по умолчанию."""
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    full_page: Optional[bool] = None
    devices: Optional[Tuple[str, ...]] = None
    timeout_ms: Optional[int] = Field(None, gt=0)
    required_selectors: Optional[Tuple[str, ...]] = None
    abort_if_fail: Optional[bool] = None
    wait_until: Optional[WaitUntil] = None
    wait_for: Optional[Tuple[str, ...]] = None
    scroll_page: Optional[bool] = None
    max_screenshot_height: Optional[int] = Field(None, gt=0)

    @field_validator("devices", mode="before")
    def _unique_devices(cls, v: Any) -> Any:
        # devices - упорядоченное множество
        if isinstance(v, (list, tuple)):
            return tuple(dict.fromkeys(v))
        return v


class RunConfig(BaseModel):
    """Конфигурация одного запуска: настройки по умолчанию и список страниц."""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    default: PageConfig = Field(..., alias="_default")
    pages: Dict[str, PageOverride] = Field(...)

    @field_validator("pages", mode="before")
    def _empty_overrides(cls, v: Any) -> Any:
        # `https://example.com/:` без значения в YAML даёт None
        if isinstance(v, dict):
            return {url: ({} if override is None else override) for url, override in v.items()}
        return v

    @field_validator("pages")
    def _check_urls(cls, v: Dict[str, PageOverride]) -> Dict[str, PageOverride]:
        for url in v:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"page key must be an absolute http(s) URL: {url!r}")
        return v


def merge_config(default: PageConfig, override: PageOverride | None) -> PageConfig:
    """Накладывает override на default по полям, без глубокого слияния списков."""
    if override is None:
        return default
    update = {
        name: value
        for name, value in override.model_dump(exclude_unset=True).items()
        # null допустим только для снятия лимита высоты
        if value is not None or name == "max_screenshot_height"
    }
    return default.model_copy(update=update)


_DEFAULT_CFG = Path("config.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}"
        )
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}"
        )
    return data


def load_config(path: Union[str, Path, None] = None) -> RunConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект RunConfig.
    Любая проблема с файлом или схемой поднимается как ConfigurationError.
    """
    path_obj = _DEFAULT_CFG if path is None else Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise ConfigurationError(f"Файл конфигурации не найден: {path_obj}")

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ConfigurationError(f"Неподдерживаемый формат конфига: {suffix}")

    if "_default" not in data or "pages" not in data:
        raise ConfigurationError("Конфиг должен содержать секции `_default` и `pages`")

    try:
        cfg = RunConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Некорректный конфиг {path_obj}: {exc}") from exc

    if not cfg.pages:
        raise ConfigurationError("No pages configured")
    return cfg
