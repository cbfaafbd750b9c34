"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _first_env(*names: str) -> str | None:
    """Return the first non-empty environment variable among ``names``."""

    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Churchbook"
    DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
    DEFAULT_CURRENCY_SYMBOL = "₹"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("CHURCHBOOK_DEV_MODE", default=True)
        self.GEMINI_API_KEY = _first_env("CHURCHBOOK_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY")
        self.GEMINI_MODEL = os.getenv("CHURCHBOOK_GEMINI_MODEL", self.DEFAULT_GEMINI_MODEL)
        self.CURRENCY_SYMBOL = os.getenv(
            "CHURCHBOOK_CURRENCY_SYMBOL", self.DEFAULT_CURRENCY_SYMBOL
        )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs, exports and charts are written."""

        data_root = os.getenv("CHURCHBOOK_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    @property
    def exports_dir(self) -> Path:
        return Path(self.DATA_DIR) / "exports"

    @property
    def ai_enabled(self) -> bool:
        """True when an API key for the advisor is configured."""

        return bool(self.GEMINI_API_KEY)


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; never talks to the AI service."""

    DEBUG = True
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.GEMINI_API_KEY = None
