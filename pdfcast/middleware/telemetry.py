"""Request instrumentation for the podcast API."""

from __future__ import annotations

import time
from typing import Any, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.routing import Mount
from starlette.types import ASGIApp

from pdfcast.telemetry import observe_request, observe_upload_size

UPLOAD_PATH = "/api/upload"


class TelemetryMiddleware(BaseHTTPMiddleware):
    """Collect request latency, status and upload size metrics for Prometheus."""

    def __init__(self, app: ASGIApp, audio_prefix: str = "/audio") -> None:
        super().__init__(app)
        self._audio_prefix = "/" + audio_prefix.strip("/")

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method

        if method == "POST" and request.url.path == UPLOAD_PATH:
            declared = _content_length(request)
            if declared is not None:
                observe_upload_size(declared)

        try:
            response = await call_next(request)
        except Exception:
            observe_request(method, self._route_label(request), 500, time.perf_counter() - start_time)
            raise

        observe_request(
            method,
            self._route_label(request),
            response.status_code,
            time.perf_counter() - start_time,
        )
        return response

    def _route_label(self, request: Request) -> str:
        """Route template for labels; clip downloads and unknown paths are collapsed."""

        if request.url.path.startswith(self._audio_prefix + "/"):
            return self._audio_prefix
        scope_route: Any = request.scope.get("route")
        if isinstance(scope_route, Mount):
            return scope_route.path or "mount"
        if scope_route is not None:
            path = getattr(scope_route, "path", None)
            if path:
                return path
        return "unmatched"


def _content_length(request: Request) -> Optional[int]:
    raw = request.headers.get("content-length")
    if raw is None or not raw.isdigit():
        return None
    return int(raw)
