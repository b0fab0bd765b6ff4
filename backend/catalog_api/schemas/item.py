"""Item schemas"""

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional, List, Union
from datetime import datetime

from .augmentation import InsightResult, SentimentResult
from .common import CamelModel

TagStr = Annotated[str, Field(max_length=30)]


class ItemCreate(CamelModel):
    """Schema for creating an item"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=50)
    tags: Optional[List[TagStr]] = Field(None, max_length=10)

    def store_fields(self) -> dict:
        """Fields to hand to the store; omitted ones fall back to store defaults"""
        return self.model_dump(exclude_none=True)


class ItemUpdate(CamelModel):
    """Schema for updating an item; every field is optional"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=50)
    tags: Optional[List[TagStr]] = Field(None, max_length=10)

    def store_fields(self) -> dict:
        """Only the fields the caller actually sent with a value"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ItemResponse(CamelModel):
    """Schema for item response"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    description: str
    category: str
    tags: List[str]
    ai_insights: Optional[InsightResult] = None
    sentiment: Optional[SentimentResult] = None
    created_at: datetime
    updated_at: datetime


class ItemInsightsResponse(CamelModel):
    """Item together with freshly generated insights"""

    item: ItemResponse
    insights: InsightResult


class ItemSentimentResponse(CamelModel):
    """Item together with a freshly generated sentiment analysis"""

    item: ItemResponse
    sentiment: SentimentResult


class CatalogStats(CamelModel):
    """Aggregate statistics over the catalog"""

    total: int
    with_insights: int
    categories: int
    unique_tags: int
    average_tags_per_item: Union[str, int]
