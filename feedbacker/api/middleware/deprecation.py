from __future__ import annotations

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class DeprecationMiddleware(BaseHTTPMiddleware):
    """Adds Deprecation headers to legacy unversioned routes."""

    def __init__(self, app) -> None:
        super().__init__(app)
        self._map = {
            "/healthz": "/v1/healthz",
            "/readyz": "/v1/readyz",
        }

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        response = await call_next(request)
        successor = self._map.get(request.url.path)
        if successor:
            response.headers["Deprecation"] = "true"
            response.headers["Link"] = f'<{successor}>; rel="successor-version"'
        return response
