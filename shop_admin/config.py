import os
from pathlib import Path

from .constants import (
    DATA_DIR,
    DB_FILE_NAME,
    DEFAULT_API_BASE_URL,
    DEFAULT_HTTP_TIMEOUT,
)

BASE_DIR = Path(__file__).resolve().parent
DATA_PATH = Path(os.environ.get("SHOP_ADMIN_DATA_DIR") or (BASE_DIR / DATA_DIR))
DB_PATH = DATA_PATH / DB_FILE_NAME

API_BASE_URL = (os.environ.get("SHOP_ADMIN_API_URL") or DEFAULT_API_BASE_URL).rstrip("/")
LOG_LEVEL = (os.environ.get("SHOP_ADMIN_LOG_LEVEL") or "INFO").upper()


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


HTTP_TIMEOUT = _float_env("SHOP_ADMIN_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)

# ensure data dir exists early
DATA_PATH.mkdir(parents=True, exist_ok=True)
