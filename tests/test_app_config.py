"""Tests for the JSON config file and its environment override."""

from __future__ import annotations

import pytest

from utils import app_config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.delenv("FINANCE_API_URL", raising=False)
    return tmp_path / "config.json"


def test_missing_config_uses_defaults(config_file) -> None:
    assert app_config.load_config() == {}
    assert app_config.get_api_base_url() == "http://localhost:8080"
    assert app_config.get_request_timeout() is None
    assert app_config.get_setting("date_format") == "YYYY-MM-DD"


def test_corrupt_config_is_ignored(config_file) -> None:
    config_file.write_text("{not json", encoding="utf-8")

    assert app_config.load_config() == {}


def test_base_url_from_file_drops_trailing_slash(config_file) -> None:
    config_file.write_text('{"api_base_url": "http://finance.example:9000/"}', encoding="utf-8")

    assert app_config.get_api_base_url() == "http://finance.example:9000"


def test_environment_overrides_file(config_file, monkeypatch) -> None:
    config_file.write_text('{"api_base_url": "http://from-file"}', encoding="utf-8")
    monkeypatch.setenv("FINANCE_API_URL", "http://from-env/")

    assert app_config.get_api_base_url() == "http://from-env"


@pytest.mark.parametrize(
    "value, expected",
    [(None, None), ("", None), (0, None), (-3, None), ("abc", None), (10, 10.0), ("2.5", 2.5)],
)
def test_request_timeout_parsing(value, expected) -> None:
    assert app_config.get_request_timeout({"request_timeout": value}) == expected
