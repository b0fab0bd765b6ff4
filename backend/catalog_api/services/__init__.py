"""Catalog and augmentation services"""

from .catalog_store import CatalogStore
from .generator import GeneratorClient, UnconfiguredGenerator, OpenAIGenerator, build_generator
from .augmentation import AugmentationGateway
from .item_ai import ItemAIService

__all__ = [
    "CatalogStore",
    "GeneratorClient",
    "UnconfiguredGenerator",
    "OpenAIGenerator",
    "build_generator",
    "AugmentationGateway",
    "ItemAIService",
]
