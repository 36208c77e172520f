"""Bootstrap configuration. Zero imports from the rest of the app except constants.

Stores user preferences that must be known before the window opens
(server URL, appearance, display date format, log level).
Config lives in ~/.finance_manager/config.json; FINANCE_API_URL overrides
the server URL.
"""
import json
import os
from pathlib import Path

from utils.constants import API_URL_ENV_VAR, DEFAULT_API_BASE_URL

CONFIG_DIR = Path.home() / ".finance_manager"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULTS = {
    "api_base_url": DEFAULT_API_BASE_URL,
    "request_timeout": None,
    "appearance_mode": "system",
    "date_format": "YYYY-MM-DD",
    "log_level": "INFO",
}


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def get_setting(key: str, config: dict | None = None):
    """Return config[key], falling back to DEFAULTS."""
    if config is None:
        config = load_config()
    return config.get(key, DEFAULTS.get(key))


def get_api_base_url(config: dict | None = None) -> str:
    env = os.environ.get(API_URL_ENV_VAR, "").strip()
    if env:
        return env.rstrip("/")
    return str(get_setting("api_base_url", config)).rstrip("/")


def get_request_timeout(config: dict | None = None) -> float | None:
    """Seconds, or None to keep the HTTP client's default."""
    value = get_setting("request_timeout", config)
    if value in (None, ""):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None
