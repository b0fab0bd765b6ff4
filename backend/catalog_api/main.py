"""
Catalog AI API - Main FastAPI Application

An item catalog with optional AI augmentation:
- CRUD, search, category/tag filters and statistics over an in-memory catalog
- AI insights and sentiment analysis written back onto items
- Semantic search and item recommendations
- Drafting of API test cases
- Deterministic fallbacks whenever the text generation provider is
  unconfigured or unusable
- Structured Logging
- Prometheus Metrics
- Rate Limiting
"""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .api import api_router
from .services.augmentation import AugmentationGateway
from .services.catalog_store import CatalogStore
from .services.generator import build_generator
from .services.item_ai import ItemAIService
from .utils.logging import setup_logging, get_logger, configure_uvicorn_logging
from .utils.metrics import setup_metrics
from .utils.rate_limit import build_limiter, enforce_rate_limit

logger = get_logger(__name__)

FEATURES = [
    "CRUD operations for items",
    "AI-powered insights generation",
    "Smart search with semantic understanding",
    "Sentiment analysis",
    "Automated test case generation",
    "Item recommendations",
]


def _error_body(error: str, message: Optional[str] = None, **extra) -> dict:
    body = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Render every error in the JSON envelope"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        error = HTTPStatus(exc.status_code).phrase
        message = exc.detail
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == error:
            message = f"Route {request.url.path} not found"

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(error, message),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Validation failed", details=details)
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error",
            method=request.method,
            url=str(request.url),
            exc_info=exc
        )

        extra = {}
        if settings.is_development:
            extra["detail"] = f"{type(exc).__name__}: {exc}"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal Server Error", "Something went wrong", **extra)
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application with its own store, gateway and AI service

    Args:
        settings: Explicit settings; the cached environment settings otherwise
    """
    settings = settings or get_settings()

    setup_logging(log_level=settings.LOG_LEVEL)
    configure_uvicorn_logging(environment=settings.ENVIRONMENT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""

        logger.info(
            "Starting Catalog AI API",
            version=settings.VERSION,
            environment=settings.ENVIRONMENT,
            ai_mode=app.state.gateway.mode
        )
        if app.state.gateway.mode == "degraded":
            logger.warning("OpenAI API key not found - AI features will use fallback responses")

        yield

        logger.info("Shutting down Catalog AI API")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="""
    # Catalog AI API

    Item management with AI-powered augmentation.

    ## Features

    - CRUD, search, category and tag filters, statistics
    - AI insights and sentiment analysis stored on each item
    - Smart search and recommendations
    - Test case drafting for the item endpoints

    Every AI operation answers with a deterministic fallback when the text
    generation provider is not configured or fails.
    """,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "items", "description": "Item management and AI operations"},
            {"name": "root", "description": "Service information and health"},
        ]
    )

    store = CatalogStore()
    gateway = AugmentationGateway(build_generator(settings))
    app.state.settings = settings
    app.state.store = store
    app.state.gateway = gateway
    app.state.item_ai = ItemAIService(store, gateway)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.state.limiter = build_limiter(settings)

    register_exception_handlers(app, settings)

    if settings.ENABLE_METRICS:
        setup_metrics(app)

    app.include_router(
        api_router,
        prefix=settings.API_PREFIX,
        dependencies=[Depends(enforce_rate_limit)]
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests"""
        logger.info(
            "Request received",
            method=request.method,
            url=str(request.url),
            client=request.client.host if request.client else None
        )

        response = await call_next(request)

        logger.info(
            "Request completed",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code
        )

        return response

    @app.get("/", tags=["root"])
    def root():
        """Root endpoint"""
        return {
            "message": "Catalog AI API",
            "version": settings.VERSION,
            "docs": "/docs",
            "status": "operational"
        }

    @app.get("/health", tags=["root"], status_code=status.HTTP_200_OK)
    def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "ai_mode": gateway.mode
        }

    @app.get(settings.API_PREFIX, tags=["root"])
    def api_info():
        """API information"""
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "description": "AI-powered item management API",
            "endpoints": {
                "items": f"{settings.API_PREFIX}/items",
                "health": "/health"
            },
            "features": FEATURES
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().is_development
    )
