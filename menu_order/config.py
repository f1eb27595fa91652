"""Runtime configuration defaults for the API client, session storage and logging."""

from __future__ import annotations

import logging
import os
from pathlib import Path

API_BASE_URL = os.environ.get("MENU_ORDER_API_URL", "http://localhost:3000/api")
REQUEST_TIMEOUT_SECONDS = 10.0

DB_PATH = os.environ.get("MENU_ORDER_DB_PATH", "data/session.db")
TOKEN_VALIDITY_DAYS = 2

# Menu and order lists refresh on this period while their screen is open.
POLL_INTERVAL_SECONDS = 5.0

LOG_PATH = os.environ.get("MENU_ORDER_LOG_PATH", "/tmp/menu-order-debug.log")
LOG_LEVEL = os.environ.get("MENU_ORDER_LOG_LEVEL", "INFO")


def setup_logging(level: str = LOG_LEVEL, log_path: str = LOG_PATH) -> logging.Logger:
    """Configure file logging so log output never draws over the terminal UI."""
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger("menu_order")
