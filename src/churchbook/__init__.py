"""Churchbook: financial books for a local church."""

from .config import BaseConfig, TestConfig
from .state import LedgerState, LedgerStore

__all__ = ["BaseConfig", "LedgerState", "LedgerStore", "TestConfig"]

__version__ = "0.1.0"
