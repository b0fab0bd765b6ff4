"""Utility modules"""

from .database import build_engine, init_db
from .logging import get_logger, setup_logging

__all__ = ["build_engine", "init_db", "get_logger", "setup_logging"]
