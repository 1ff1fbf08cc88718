from __future__ import annotations

import time
import uuid
from typing import Callable, Dict, Tuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ...settings import get_settings
from ..metrics import inc
from ..models import ErrorCode, error_response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket per bearer token (or client address) for POST routes."""

    def __init__(self, app) -> None:
        super().__init__(app)
        self._buckets: Dict[str, Tuple[float, float]] = {}

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        if request.method != "POST":
            return await call_next(request)

        settings = get_settings()
        rate = settings.RATE_LIMIT_PER_MIN / 60.0
        burst = settings.RATE_LIMIT_BURST

        request_id = getattr(
            request.state, "request_id", request.headers.get("x-request-id") or str(uuid.uuid4())
        )
        request.state.request_id = request_id

        auth = request.headers.get("authorization", "")
        if auth.lower().startswith("bearer "):
            key = auth.split(" ", 1)[1]
        else:
            key = request.client.host if request.client else "anonymous"

        now = time.monotonic()
        tokens, last = self._buckets.get(key, (burst, now))
        tokens = min(burst, tokens + (now - last) * rate)
        if tokens < 1:
            needed = 1 - tokens
            retry_after = max(1, int(needed / rate))
            self._buckets[key] = (tokens, now)
            inc("rate_limited")
            return error_response(
                ErrorCode.rate_limited,
                "Rate limit exceeded",
                429,
                request_id=request_id,
                headers={"Retry-After": str(retry_after)},
            )
        self._buckets[key] = (tokens - 1, now)
        return await call_next(request)
