"""Item API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List
from uuid import UUID

from ..models.catalog import CatalogItem
from ..schemas.common import ApiResponse
from ..schemas.item import (
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemInsightsResponse,
    ItemSentimentResponse,
    CatalogStats,
)
from ..schemas.augmentation import RecommendationItem, TestCaseSet
from ..services.catalog_store import CatalogStore
from ..services.item_ai import ItemAIService
from ..utils.dependencies import get_store, get_item_ai_service

router = APIRouter()

ITEM_NOT_FOUND = "Item not found"


def _out(item: CatalogItem) -> ItemResponse:
    return ItemResponse.model_validate(item)


def _ok(**fields) -> ApiResponse:
    return ApiResponse(success=True, **fields)


def _many(items: List[CatalogItem]) -> ApiResponse[List[ItemResponse]]:
    return _ok(data=[_out(item) for item in items], count=len(items))


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ITEM_NOT_FOUND)


@router.get("", response_model=ApiResponse[List[ItemResponse]], response_model_exclude_unset=True)
def list_items(store: CatalogStore = Depends(get_store)):
    """List all items in insertion order"""
    return _many(store.get_all())


@router.get("/stats", response_model=ApiResponse[CatalogStats], response_model_exclude_unset=True)
def get_stats(store: CatalogStore = Depends(get_store)):
    """Aggregate catalog statistics"""
    return _ok(data=CatalogStats(**store.get_stats()))


@router.get("/search", response_model=ApiResponse[List[ItemResponse]], response_model_exclude_unset=True)
def search_items(
    query: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(10, ge=1, le=50),
    store: CatalogStore = Depends(get_store)
):
    """Case-insensitive search over name, description, category and tags"""

    matches = store.search(query)[:limit]
    return _ok(data=[_out(item) for item in matches], count=len(matches), query=query)


@router.get("/search/ai", response_model=ApiResponse[List[ItemResponse]], response_model_exclude_unset=True)
async def smart_search(
    query: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(10, ge=1, le=50),
    service: ItemAIService = Depends(get_item_ai_service)
):
    """Semantic search ranked by the text generation provider"""

    outcome = await service.smart_search(query, limit)
    return _ok(
        data=[_out(item) for item in outcome.items],
        count=outcome.count,
        query=outcome.query
    )


@router.get(
    "/recommendations",
    response_model=ApiResponse[List[RecommendationItem]],
    response_model_exclude_unset=True
)
async def get_recommendations(
    limit: int = Query(5, ge=1, le=20),
    service: ItemAIService = Depends(get_item_ai_service)
):
    """Suggest new items related to the existing catalog"""

    recommendations = await service.get_recommendations(limit)
    return _ok(data=recommendations, count=len(recommendations))


@router.get(
    "/category/{category}",
    response_model=ApiResponse[List[ItemResponse]],
    response_model_exclude_unset=True
)
def get_items_by_category(category: str, store: CatalogStore = Depends(get_store)):
    """Items in exactly this category"""
    return _many(store.get_by_category(category))


@router.get("/tag/{tag}", response_model=ApiResponse[List[ItemResponse]], response_model_exclude_unset=True)
def get_items_by_tag(tag: str, store: CatalogStore = Depends(get_store)):
    """Items carrying exactly this tag"""
    return _many(store.get_by_tag(tag))


@router.get("/{item_id}", response_model=ApiResponse[ItemResponse], response_model_exclude_unset=True)
def get_item(item_id: UUID, store: CatalogStore = Depends(get_store)):
    """Get a specific item"""

    item = store.get_by_id(str(item_id))
    if item is None:
        raise _not_found()

    return _ok(data=_out(item))


@router.post(
    "",
    response_model=ApiResponse[ItemResponse],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED
)
def create_item(item: ItemCreate, store: CatalogStore = Depends(get_store)):
    """Create a new item"""

    created = store.create(**item.store_fields())
    return _ok(data=_out(created), message="Item created")


@router.put("/{item_id}", response_model=ApiResponse[ItemResponse], response_model_exclude_unset=True)
def update_item(item_id: UUID, item_update: ItemUpdate, store: CatalogStore = Depends(get_store)):
    """Update an item; only provided fields change"""

    updated = store.update(str(item_id), item_update.store_fields())
    if updated is None:
        raise _not_found()

    return _ok(data=_out(updated), message="Item updated")


@router.delete("/{item_id}", response_model=ApiResponse[ItemResponse], response_model_exclude_unset=True)
def delete_item(item_id: UUID, store: CatalogStore = Depends(get_store)):
    """Delete an item"""

    removed = store.remove(str(item_id))
    if removed is None:
        raise _not_found()

    return _ok(data=_out(removed), message="Item deleted")


@router.get(
    "/{item_id}/insights",
    response_model=ApiResponse[ItemInsightsResponse],
    response_model_exclude_unset=True
)
async def generate_insights(item_id: UUID, service: ItemAIService = Depends(get_item_ai_service)):
    """Generate AI insights for an item and store them on it"""

    outcome = await service.generate_insights(str(item_id))
    if outcome is None:
        raise _not_found()

    return _ok(data=ItemInsightsResponse(item=_out(outcome.item), insights=outcome.insights))


@router.get(
    "/{item_id}/sentiment",
    response_model=ApiResponse[ItemSentimentResponse],
    response_model_exclude_unset=True
)
async def analyze_sentiment(item_id: UUID, service: ItemAIService = Depends(get_item_ai_service)):
    """Analyze an item's sentiment and store it on the item"""

    outcome = await service.analyze_sentiment(str(item_id))
    if outcome is None:
        raise _not_found()

    return _ok(data=ItemSentimentResponse(item=_out(outcome.item), sentiment=outcome.sentiment))


@router.get(
    "/{item_id}/test-cases",
    response_model=ApiResponse[TestCaseSet],
    response_model_exclude_unset=True
)
async def generate_test_cases(item_id: UUID, service: ItemAIService = Depends(get_item_ai_service)):
    """Draft API test cases for the item endpoints"""

    test_cases = await service.generate_test_cases(str(item_id))
    if test_cases is None:
        raise _not_found()

    return _ok(data=test_cases)
