"""Augmentation Gateway

Turns catalog data into one of five result shapes using the text
generation provider when one is configured. Whenever the provider is
unconfigured, fails, times out or answers with something that does not
validate, the operation's deterministic fallback is returned instead.
Failures are absorbed here and never reach the caller.
"""

from typing import Callable, List, Optional, Sequence, TypeVar

from ..models.catalog import CatalogItem
from ..schemas.augmentation import (
    InsightResult,
    SentimentResult,
    RecommendationItem,
    TestCase,
    TestCaseSet,
)
from ..utils.logging import get_logger
from ..utils.metrics import record_augmentation, record_fallback, time_augmentation
from .generator import GeneratorClient, GeneratorTimeout
from .response_parsing import Parsed, ParseFailure, ParseResult, parse_array, parse_name_list, parse_object

logger = get_logger(__name__)

R = TypeVar("R")

INSIGHTS = "insights"
SENTIMENT = "sentiment"
SMART_SEARCH = "smart_search"
RECOMMENDATIONS = "recommendations"
TEST_CASES = "test_cases"

# (max_tokens, temperature) per operation
GENERATION_PARAMS = {
    INSIGHTS: (300, 0.7),
    SMART_SEARCH: (100, 0.3),
    RECOMMENDATIONS: (400, 0.8),
    SENTIMENT: (200, 0.5),
    TEST_CASES: (600, 0.3),
}

FALLBACK_CATEGORIES = ["Technology", "Books", "Electronics", "Clothing", "Food"]


# Prompts

def _describe_items(items: Sequence[CatalogItem]) -> str:
    return "\n".join(
        f"- {item.name}: {item.description or 'No description'}" for item in items
    )


def insights_prompt(item: CatalogItem) -> str:
    return (
        "Analyze this item and provide intelligent insights:\n"
        f"Name: {item.name}\n"
        f"Description: {item.description or 'No description provided'}\n\n"
        "Please provide:\n"
        "1. Suggested category\n"
        "2. Relevant tags\n"
        "3. Business insights\n"
        "4. Improvement suggestions\n\n"
        "Format as JSON with keys: category (string), tags (array of strings), "
        "insights (string), suggestions (array of strings)"
    )


def sentiment_prompt(item: CatalogItem) -> str:
    return (
        "Analyze the sentiment and tone of this item:\n"
        f"Name: {item.name}\n"
        f"Description: {item.description or 'No description'}\n\n"
        "Provide analysis as JSON with: sentiment (positive/negative/neutral), "
        "confidence (0-1), tone (string), suggestions (array of strings)"
    )


def smart_search_prompt(items: Sequence[CatalogItem], query: str) -> str:
    return (
        "Given these items and search query, return the most relevant items:\n\n"
        f'Search Query: "{query}"\n\n'
        f"Items:\n{_describe_items(items)}\n\n"
        "Return only the item names that match the query, separated by commas."
    )


def recommendations_prompt(items: Sequence[CatalogItem], limit: int) -> str:
    return (
        f"Based on these existing items, suggest {limit} new related items:\n\n"
        f"Existing Items:\n{_describe_items(items)}\n\n"
        "Return suggestions as a JSON array with objects containing: name, description, category"
    )


def draft_test_cases_prompt() -> str:
    return (
        "Generate comprehensive test cases for this item API endpoint:\n\n"
        "Item Structure:\n"
        "- id: string\n"
        "- name: string (required)\n"
        "- description: string (optional)\n"
        "- category: string (optional)\n"
        "- tags: array of strings (optional)\n"
        "- createdAt: date\n"
        "- updatedAt: date\n\n"
        "Generate test cases covering:\n"
        "1. Valid item creation\n"
        "2. Invalid item creation (missing name)\n"
        "3. Item retrieval\n"
        "4. Item update\n"
        "5. Item deletion\n"
        "6. Edge cases\n\n"
        'Return as JSON: {"testCases": [{"name", "method", "path", "body", "expectedStatus"}]}'
    )


# Fallbacks

def fallback_insights(item: CatalogItem) -> InsightResult:
    return InsightResult(
        category="General",
        tags=["item", "general"],
        insights="Standard item with basic information",
        suggestions=["Add more detailed description", "Consider adding tags"],
    )


def fallback_sentiment(item: CatalogItem) -> SentimentResult:
    return SentimentResult(sentiment="neutral", confidence=0.5, tone="neutral", suggestions=[])


def fallback_search(items: Sequence[CatalogItem], query: str) -> List[CatalogItem]:
    needle = query.lower()
    return [
        item for item in items
        if needle in item.name.lower() or needle in (item.description or "").lower()
    ]


def fallback_recommendations(items: Sequence[CatalogItem], limit: int) -> List[RecommendationItem]:
    return [
        RecommendationItem(
            name=f"Recommended Item {index + 1}",
            description="AI-generated recommendation based on your items",
            category=FALLBACK_CATEGORIES[index % len(FALLBACK_CATEGORIES)],
        )
        for index in range(limit)
    ]


def fallback_test_cases(item: CatalogItem) -> TestCaseSet:
    return TestCaseSet(test_cases=[
        TestCase(
            name="Create valid item",
            method="POST",
            path="/api/items",
            body={"name": "Test Item", "description": "Test Description"},
            expected_status=201,
        ),
        TestCase(
            name="Create item without name",
            method="POST",
            path="/api/items",
            body={"description": "Test Description"},
            expected_status=400,
        ),
    ])


def match_names(items: Sequence[CatalogItem], names: Sequence[str]) -> List[CatalogItem]:
    """Items whose name contains any of the given names, case-insensitively"""

    lowered = [name.lower() for name in names]
    return [
        item for item in items
        if any(name in item.name.lower() for name in lowered)
    ]


class AugmentationGateway:
    """
    Stateless facade over the text generation provider

    The Live/Degraded decision is taken on every call from the generator
    variant; a failed call falls back for that call only.
    """

    def __init__(self, generator: GeneratorClient):
        self.generator = generator

    @property
    def mode(self) -> str:
        return "live" if self.generator.configured else "degraded"

    async def insights(self, item: CatalogItem) -> InsightResult:
        return await self._augment(
            INSIGHTS,
            lambda: insights_prompt(item),
            lambda text: parse_object(text, InsightResult),
            lambda: fallback_insights(item),
        )

    async def sentiment(self, item: CatalogItem) -> SentimentResult:
        return await self._augment(
            SENTIMENT,
            lambda: sentiment_prompt(item),
            lambda text: parse_object(text, SentimentResult),
            lambda: fallback_sentiment(item),
        )

    async def smart_search(self, items: Sequence[CatalogItem], query: str) -> List[CatalogItem]:
        if not items:
            return []

        def parse_matches(text: str) -> ParseResult:
            names = parse_name_list(text)
            if isinstance(names, ParseFailure):
                return names
            return Parsed(match_names(items, names.value))

        return await self._augment(
            SMART_SEARCH,
            lambda: smart_search_prompt(items, query),
            parse_matches,
            lambda: fallback_search(items, query),
        )

    async def recommendations(self, items: Sequence[CatalogItem], limit: int = 5) -> List[RecommendationItem]:
        suggestions = await self._augment(
            RECOMMENDATIONS,
            lambda: recommendations_prompt(items, limit),
            lambda text: parse_array(text, RecommendationItem),
            lambda: fallback_recommendations(items, limit),
        )
        return suggestions[:limit]

    async def test_cases(self, item: CatalogItem) -> TestCaseSet:
        return await self._augment(
            TEST_CASES,
            draft_test_cases_prompt,
            lambda text: parse_object(text, TestCaseSet),
            lambda: fallback_test_cases(item),
        )

    async def _augment(
        self,
        operation: str,
        build_prompt: Callable[[], str],
        parse: Callable[[str], ParseResult],
        fallback: Callable[[], R],
    ) -> R:
        if not self.generator.configured:
            return self._fall_back(operation, "unconfigured", fallback)

        max_tokens, temperature = GENERATION_PARAMS[operation]
        try:
            with time_augmentation(operation):
                text = await self.generator.complete(build_prompt(), max_tokens, temperature)
        except GeneratorTimeout as exc:
            return self._fall_back(operation, "timeout", fallback, error=str(exc))
        except Exception as exc:
            return self._fall_back(operation, "provider_error", fallback, error=str(exc))

        result = parse(text)
        if isinstance(result, ParseFailure):
            return self._fall_back(operation, "parse_error", fallback, error=result.reason)

        record_augmentation(operation, "live")
        return result.value

    @staticmethod
    def _fall_back(operation: str, reason: str, fallback: Callable[[], R], error: Optional[str] = None) -> R:
        if reason == "unconfigured":
            logger.debug("Using fallback", operation=operation, reason=reason)
        else:
            logger.warning("Augmentation failed, using fallback", operation=operation, reason=reason, error=error)

        record_fallback(operation, reason)
        record_augmentation(operation, "fallback")
        return fallback()
