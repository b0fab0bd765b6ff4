"""Catalog models"""

from .base import Base
from .catalog import CatalogItem, DEFAULT_CATEGORY
from .item import ItemRecord
from .analytics import AIAnalytics

__all__ = [
    "Base",
    "CatalogItem",
    "DEFAULT_CATEGORY",
    "ItemRecord",
    "AIAnalytics",
]
