"""Prometheus metrics configuration"""

from prometheus_client import Counter, Histogram, Gauge, Info
from prometheus_fastapi_instrumentator import Instrumentator

# Application info
app_info = Info('catalog_ai', 'Catalog AI API Information')
app_info.info({
    'version': '1.0.0',
    'service': 'catalog-ai-api'
})

# Augmentation metrics
augmentation_requests_total = Counter(
    'augmentation_requests_total',
    'Total augmentation requests by outcome',
    ['operation', 'outcome']
)

augmentation_fallbacks_total = Counter(
    'augmentation_fallbacks_total',
    'Augmentation requests answered by the deterministic fallback',
    ['operation', 'reason']
)

augmentation_duration_seconds = Histogram(
    'augmentation_duration_seconds',
    'Time spent waiting on the text generation provider',
    ['operation']
)

# Catalog metrics
catalog_items_gauge = Gauge(
    'catalog_items',
    'Number of items in the catalog store'
)


def setup_metrics(app):
    """
    Setup Prometheus metrics for FastAPI app

    Args:
        app: FastAPI application instance
    """
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics"],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True
    )

    instrumentator.instrument(app).expose(app, endpoint="/metrics")

    return instrumentator


def time_augmentation(operation: str):
    """
    Context manager timing one provider call

    Usage:
        with time_augmentation("insights"):
            text = await generator.complete(...)
    """
    return augmentation_duration_seconds.labels(operation=operation).time()


def record_augmentation(operation: str, outcome: str):
    """Record an augmentation answered live or by fallback"""
    augmentation_requests_total.labels(
        operation=operation,
        outcome=outcome
    ).inc()


def record_fallback(operation: str, reason: str):
    """Record why an augmentation fell back"""
    augmentation_fallbacks_total.labels(
        operation=operation,
        reason=reason
    ).inc()


def update_catalog_size(count: int):
    """Set the catalog item gauge"""
    catalog_items_gauge.set(count)
