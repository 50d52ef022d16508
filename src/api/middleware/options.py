"""
Preflight middleware.

Answers every OPTIONS request with 200 and an empty body before routing,
attaching the CORS headers a browser preflight needs.
"""

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization, X-Request-ID"


class OptionsMiddleware(BaseHTTPMiddleware):
    """Short-circuit OPTIONS requests."""

    def __init__(self, app, allow_origins: list[str] | None = None):
        super().__init__(app)
        self.allow_origins = allow_origins or ["*"]

    def _allowed_origin(self, origin: str | None) -> str | None:
        if "*" in self.allow_origins:
            return "*"
        if origin and origin in self.allow_origins:
            return origin
        return None

    async def dispatch(self, request: Request, call_next):
        if request.method != "OPTIONS":
            return await call_next(request)

        response = Response(status_code=200)
        allowed = self._allowed_origin(request.headers.get("origin"))
        if allowed is not None:
            response.headers["Access-Control-Allow-Origin"] = allowed
            response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
            response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
            if allowed != "*":
                response.headers["Vary"] = "Origin"
        return response
