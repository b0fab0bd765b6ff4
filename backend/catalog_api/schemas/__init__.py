"""Pydantic schemas for request/response validation"""

from .common import ApiResponse, ErrorResponse
from .item import (
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemInsightsResponse,
    ItemSentimentResponse,
    CatalogStats,
)
from .augmentation import (
    InsightResult,
    SentimentResult,
    RecommendationItem,
    TestCase,
    TestCaseSet,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemInsightsResponse",
    "ItemSentimentResponse",
    "CatalogStats",
    "InsightResult",
    "SentimentResult",
    "RecommendationItem",
    "TestCase",
    "TestCaseSet",
]
