import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from api.finance_api import FinanceApiClient
from ui.app_window import AppWindow
from utils.app_config import get_api_base_url, get_request_timeout, get_setting, load_config
from utils.logging_utils import configure_root_logger, get_logger


def main():
    # ── Bootstrap: config + logging ───────────────────────────────────────────
    config = load_config()
    configure_root_logger(get_setting("log_level", config))
    logger = get_logger("finance_manager")

    # ── API client ────────────────────────────────────────────────────────────
    base_url = get_api_base_url(config)
    api = FinanceApiClient(base_url, timeout=get_request_timeout(config))
    logger.info("Using finance API at %s", api.base_url)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(get_setting("appearance_mode", config))
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(api_client=api, date_format=get_setting("date_format", config))
    app.mainloop()


if __name__ == "__main__":
    main()
