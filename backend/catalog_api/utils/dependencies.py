"""Service dependencies for FastAPI

The store and AI service are built once per application in
create_app() and kept on app.state; routes receive them through these
providers.
"""

from fastapi import Request

from ..services.catalog_store import CatalogStore
from ..services.item_ai import ItemAIService


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_item_ai_service(request: Request) -> ItemAIService:
    return request.app.state.item_ai
