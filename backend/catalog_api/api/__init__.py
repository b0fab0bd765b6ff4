"""API routes"""

from fastapi import APIRouter
from ..schemas.common import ErrorResponse
from .items import router as items_router

api_router = APIRouter()

api_router.include_router(
    items_router,
    prefix="/items",
    tags=["items"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Item not found"},
    }
)
