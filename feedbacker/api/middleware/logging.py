from __future__ import annotations

import logging
import time
import uuid
import re
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from ..metrics import record_http_request


def metrics_path(request: Request, status: int = 200) -> str:
    """Route label for metrics: the mounted path, templated when it has parameters."""
    path = request.url.path
    route = request.scope.get("route")
    if route is None:
        return "unmatched" if status == 404 else path
    template = getattr(route, "path", None) or path
    if "{" not in template:
        return path
    # route.path may omit the router prefix; take it from the concrete path
    extra = path.rstrip("/").count("/") - template.rstrip("/").count("/")
    if extra > 0:
        return "/".join(path.split("/")[: extra + 1]) + template
    return template


class LoggingMiddleware(BaseHTTPMiddleware):
    """Attach/propagate request IDs and log request lifecycle."""

    def __init__(self, app) -> None:
        super().__init__(app)
        self.logger = logging.getLogger("feedbacker")
        # redact any header key matching these patterns (case-insensitive)
        self._redact_key_re = re.compile(r"(authorization|api[-_]?key|token|cookie)", re.IGNORECASE)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        request_id = (
            getattr(request.state, "request_id", None)
            or request.headers.get("x-request-id")
            or str(uuid.uuid4())
        )
        request.state.request_id = request_id
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            client_ip = request.headers.get("x-forwarded-for", request.client.host if request.client else "")
            client_ip = client_ip.split(",")[0].strip()
            headers = {
                k: "REDACTED" if self._redact_key_re.search(k) else v
                for k, v in request.headers.items()
            }
            status = response.status_code if response else 500
            extra = {
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "request_id": request_id,
                "client_ip": client_ip,
                "headers": headers,
            }
            self.logger.info("request", extra=extra)
            if response:
                response.headers["X-Request-ID"] = request_id

            try:
                record_http_request(
                    method=request.method,
                    path=metrics_path(request, status),
                    status=status,
                    duration_s=duration_ms / 1000.0,
                )
            except Exception:
                # never let metrics break requests
                self.logger.exception("metrics_record_failed")
