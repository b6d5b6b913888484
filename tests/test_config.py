# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from site_shots.config import PageConfig, PageOverride, RunConfig, load_config, merge_config
from site_shots.errors import ConfigurationError


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


VALID_YAML = """
_default:
  fullPage: true
  devices: [desktop, mobile]
  timeoutMs: 20000
  waitUntil: networkidle
  maxScreenshotHeight: 5000
pages:
  https://example.com/:
  https://example.com/shop:
    abortIfFail: true
    requiredSelectors: ["#cart"]
    devices: [mobile]
"""


def test_load_yaml(tmp_path):
    cfg = load_config(write_file(tmp_path, VALID_YAML, ".yaml"))
    assert isinstance(cfg, RunConfig)
    assert cfg.default.timeout_ms == 20000
    assert cfg.default.wait_until == "networkidle"
    assert cfg.default.max_screenshot_height == 5000
    assert list(cfg.pages) == ["https://example.com/", "https://example.com/shop"]
    assert cfg.pages["https://example.com/"].model_dump(exclude_unset=True) == {}
    assert cfg.pages["https://example.com/shop"].abort_if_fail is True


def test_load_json(tmp_path):
    data = {"_default": {"devices": ["desktop"]}, "pages": {"https://example.com/a": {"scrollPage": True}}}
    cfg = load_config(write_file(tmp_path, json.dumps(data), ".json"))
    assert cfg.default.devices == ("desktop",)
    assert cfg.pages["https://example.com/a"].scroll_page is True


def test_defaults():
    cfg = PageConfig()
    assert cfg.full_page is True
    assert cfg.devices == ("desktop", "mobile")
    assert cfg.timeout_ms == 30000
    assert cfg.required_selectors == ()
    assert cfg.abort_if_fail is False
    assert cfg.wait_until == "load"
    assert cfg.wait_for == ()
    assert cfg.scroll_page is False
    assert cfg.max_screenshot_height is None


def test_devices_are_ordered_set():
    cfg = PageConfig(devices=["mobile", "desktop", "mobile"])
    assert cfg.devices == ("mobile", "desktop")


def test_page_config_is_frozen():
    cfg = PageConfig()
    with pytest.raises(ValidationError):
        cfg.full_page = False


@pytest.mark.parametrize(
    "content,suffix",
    [
        ("pages: {https://example.com/: {}}", ".yaml"),
        ("_default: {}", ".yaml"),
        ("_default: {}\npages: {}", ".yaml"),
        ("_default: {}\npages: {not-a-url: {}}", ".yaml"),
        ("_default: {colour: red}\npages: {https://example.com/: {}}", ".yaml"),
        ("_default: {timeoutMs: 0}\npages: {https://example.com/: {}}", ".yaml"),
        ("_default: {waitUntil: never}\npages: {https://example.com/: {}}", ".yaml"),
        ("_default: {}\npages: {https://example.com/: {maxScreenshotHeight: -1}}", ".yaml"),
        ("- just\n- a list", ".yaml"),
        ("::invalid: yaml: [", ".yaml"),
        ("{not json", ".json"),
        ("_default: {}", ".toml"),
    ],
)
def test_invalid_configs(tmp_path, content, suffix):
    with pytest.raises(ConfigurationError):
        load_config(write_file(tmp_path, content, suffix))


def test_empty_pages_message(tmp_path):
    path = write_file(tmp_path, "_default: {}\npages: {}", ".yaml")
    with pytest.raises(ConfigurationError, match="No pages configured"):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "nope.yaml")


def test_default_path_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigurationError):
        load_config(None)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


DEFAULT = PageConfig(
    devices=["desktop", "mobile"],
    required_selectors=["header", "footer"],
    wait_for=[".hero"],
    max_screenshot_height=4000,
)


@pytest.mark.parametrize(
    "override",
    [
        {},
        {"fullPage": False},
        {"devices": ["tablet"]},
        {"requiredSelectors": ["main"]},
        {"requiredSelectors": []},
        {"timeoutMs": 1000, "abortIfFail": True, "waitUntil": "commit"},
        {"waitFor": [], "scrollPage": True},
        {"maxScreenshotHeight": 800},
    ],
)
def test_merge_replaces_present_fields_only(override):
    parsed = PageOverride.model_validate(override)
    merged = merge_config(DEFAULT, parsed)
    present = parsed.model_dump(exclude_unset=True)
    for name in PageConfig.model_fields:
        expected = present[name] if name in present else getattr(DEFAULT, name)
        assert getattr(merged, name) == expected


def test_merge_lists_are_not_deep_merged():
    merged = merge_config(DEFAULT, PageOverride(requiredSelectors=["main"]))
    assert merged.required_selectors == ("main",)


def test_merge_null_height_removes_limit():
    merged = merge_config(DEFAULT, PageOverride.model_validate({"maxScreenshotHeight": None}))
    assert merged.max_screenshot_height is None


def test_merge_none_override_keeps_default():
    assert merge_config(DEFAULT, None) is DEFAULT
