"""Rate limiting utilities"""

import time

from fastapi import HTTPException, Request, status
from limits import parse_many
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import Settings

DEFAULT_SCOPE = "default"


def build_limiter(settings: Settings) -> Limiter:
    """
    Create the inbound request limiter

    Limits are keyed on the client address and enforced on every API route
    by the enforce_rate_limit dependency.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.RATE_LIMIT_DEFAULT],
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


def enforce_rate_limit(request: Request) -> None:
    """
    Count the request against the app-wide limits

    Raises:
        HTTPException: 429 with Retry-After once a limit is exhausted
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return

    key = get_remote_address(request)
    for item in parse_many(request.app.state.settings.RATE_LIMIT_DEFAULT):
        if limiter.limiter.hit(item, DEFAULT_SCOPE, key):
            continue

        reset_time, _ = limiter.limiter.get_window_stats(item, DEFAULT_SCOPE, key)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded: {item}",
            headers={"Retry-After": str(max(int(reset_time - time.time()), 1))}
        )
