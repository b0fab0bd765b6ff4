"""AI operations over catalog items

Fetches items from the CatalogStore, runs them through the
AugmentationGateway and writes insight/sentiment results back onto the
stored item. Missing items are reported as None.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..models.catalog import CatalogItem
from ..schemas.augmentation import InsightResult, SentimentResult, RecommendationItem, TestCaseSet
from ..utils.logging import get_logger
from .augmentation import AugmentationGateway
from .catalog_store import CatalogStore

logger = get_logger(__name__)


@dataclass
class InsightOutcome:
    item: CatalogItem
    insights: InsightResult


@dataclass
class SentimentOutcome:
    item: CatalogItem
    sentiment: SentimentResult


@dataclass
class SearchOutcome:
    query: str
    items: List[CatalogItem]

    @property
    def count(self) -> int:
        return len(self.items)


class ItemAIService:
    """Composes the catalog store with the augmentation gateway"""

    def __init__(self, store: CatalogStore, gateway: AugmentationGateway):
        self.store = store
        self.gateway = gateway

    async def generate_insights(self, item_id: str) -> Optional[InsightOutcome]:
        item = self.store.get_by_id(item_id)
        if item is None:
            return None

        insights = await self.gateway.insights(item)

        # the item may have been removed while the provider was answering
        updated = self.store.update_ai_insights(item_id, insights.model_dump())
        if updated is None:
            logger.info("Item removed during insight generation", item_id=item_id)
            return None

        return InsightOutcome(item=updated, insights=insights)

    async def analyze_sentiment(self, item_id: str) -> Optional[SentimentOutcome]:
        item = self.store.get_by_id(item_id)
        if item is None:
            return None

        sentiment = await self.gateway.sentiment(item)

        updated = self.store.update_sentiment(item_id, sentiment.model_dump())
        if updated is None:
            logger.info("Item removed during sentiment analysis", item_id=item_id)
            return None

        return SentimentOutcome(item=updated, sentiment=sentiment)

    async def smart_search(self, query: str, limit: int = 10) -> SearchOutcome:
        matches = await self.gateway.smart_search(self.store.get_all(), query)
        return SearchOutcome(query=query, items=matches[:limit])

    async def get_recommendations(self, limit: int = 5) -> List[RecommendationItem]:
        return await self.gateway.recommendations(self.store.get_all(), limit)

    async def generate_test_cases(self, item_id: str) -> Optional[TestCaseSet]:
        item = self.store.get_by_id(item_id)
        if item is None:
            return None
        return await self.gateway.test_cases(item)
