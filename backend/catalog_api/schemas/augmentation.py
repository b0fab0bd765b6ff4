"""Augmentation result schemas

These models double as the validators for provider output: a provider
response is only accepted once it validates against one of them. Extra
keys are ignored.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Literal, Optional

from .common import CamelModel


class InsightResult(BaseModel):
    """Category, tags and free-text insight derived for one item"""

    category: str
    tags: List[str]
    insights: str
    suggestions: List[str]


class SentimentResult(BaseModel):
    """Sentiment label with confidence and tone for one item"""

    sentiment: Literal["positive", "negative", "neutral"]
    confidence: float = Field(..., ge=0.0, le=1.0)
    tone: str
    suggestions: List[str]

    @field_validator("sentiment", mode="before")
    @classmethod
    def normalize_label(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class RecommendationItem(BaseModel):
    """A suggested new item; returned transiently, never stored"""

    name: str
    description: str
    category: str


class TestCase(CamelModel):
    """One HTTP test case descriptor"""

    __test__ = False

    name: str
    method: str
    path: str
    body: Optional[Any] = None
    expected_status: int


class TestCaseSet(CamelModel):
    """Drafted test cases for the item endpoints"""

    __test__ = False

    test_cases: List[TestCase]
