"""
FastAPI application factory.
"""

import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.dependencies import cleanup_dependencies
from src.api.middleware.options import OptionsMiddleware
from src.api.middleware.timeout import TimeoutMiddleware
from src.api.routes import health, messages, trends
from src.api.routes.health import SERVICE_NAME, SERVICE_VERSION
from src.api.routes.messages import REQUIRED_FIELDS
from src.config.settings import get_settings
from src.observability.logging import bind_request_context, clear_request_context

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        "Socialtrend API starting up",
        environment=settings.environment,
        ai_configured=settings.ai_configured,
        youtube_configured=settings.youtube_configured,
        enrichment_enabled=settings.enrichment_enabled,
    )

    yield

    logger.info("Socialtrend API shutting down")
    await cleanup_dependencies()


def _validation_summary(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    openapi_tags = [
        {"name": "health", "description": "Service health checks"},
        {"name": "trends", "description": "Cross-platform trend analysis"},
        {"name": "messages", "description": "Platform-specific post drafting"},
    ]

    app = FastAPI(
        title="Socialtrend API",
        description="""
Aggregates trending topics from Reddit, Hacker News, YouTube and Indian news
feeds, and drafts social media posts that reference them.

## Endpoints

- **/trends**: Ranked hashtags and themes for the requested platforms
- **/generate-message**: One drafted post each for Twitter, Instagram, LinkedIn and Facebook
        """,
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

    # Request timeout middleware (added before the logging middleware so
    # the timeout wraps the whole handler)
    if settings.request_timeout_seconds > 0:
        app.add_middleware(
            TimeoutMiddleware,
            timeout_seconds=settings.request_timeout_seconds,
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Ahead of CORS: OPTIONS never reaches routing
    app.add_middleware(OptionsMiddleware, allow_origins=cors_origins)

    # Request logging and correlation ID middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = (
            request.headers.get("X-Request-ID")
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )

        bind_request_context(request_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            response.headers["X-Request-ID"] = request_id

            logger.info(
                "HTTP request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            return response
        finally:
            clear_request_context()

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return JSONResponse(status_code=405, content={"error": "Method not allowed"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_summary(exc)
        if request.url.path == "/generate-message":
            content = {
                "success": False,
                "error": "Missing required fields",
                "required": REQUIRED_FIELDS,
                "message": message,
            }
        else:
            content = {"success": False, "error": "Invalid request", "message": message}
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error"},
        )

    app.include_router(health.router, tags=["health"])
    app.include_router(trends.router, tags=["trends"])
    app.include_router(messages.router, tags=["messages"])

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "docs": "/docs",
        }

    return app
