"""Runtime settings, read from the environment (and a local ``.env``)."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class ConfigurationError(Exception):
    """An environment setting has a value that cannot be used."""


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from None
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative, got {value}")
    return value


class Settings:

    def __init__(self) -> None:
        self.data_dir: Path = Path(os.getenv("POS_DATA_DIR", str(_DEFAULT_DATA_DIR)))
        self.tenant: str = os.getenv("POS_TENANT", "default")
        self.log_level: str = os.getenv("POS_LOG_LEVEL", "WARNING").upper()
        self.low_stock_threshold: int = _int_setting("POS_LOW_STOCK_THRESHOLD", 5)


def get_settings() -> Settings:
    return Settings()
