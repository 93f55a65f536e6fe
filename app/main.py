from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.ext.asyncio import AsyncEngine
from contextlib import asynccontextmanager
from typing import Optional
import httpx
import structlog

from app.core.config import Settings, get_settings
from app.core.database import create_engine, create_session_factory, init_db
from app.core.logging import setup_logging
from app.api.api import api_router
from app.api.schemas.common import HealthCheckResponse
from app.core.middleware import RequestLogMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings

    # Startup
    setup_logging(settings)
    logger = structlog.get_logger()

    logger.info("Starting application", app_name=settings.APP_NAME, version=settings.APP_VERSION)

    owns_engine = app.state.engine is None
    owns_http_client = app.state.http_client is None

    if owns_engine:
        app.state.engine = create_engine(settings)
        app.state.session_factory = create_session_factory(app.state.engine)
    if owns_http_client:
        app.state.http_client = httpx.AsyncClient()

    # Initialize database
    await init_db(app.state.engine)
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down application")
    if owns_http_client:
        await app.state.http_client.aclose()
        app.state.http_client = None
    if owns_engine:
        await app.state.engine.dispose()
        app.state.engine = None
        app.state.session_factory = None


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    structlog.get_logger("errors").error(
        "Unhandled error", path=request.url.path, error=str(exc), exc_info=exc
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_application(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Create and configure FastAPI application

    An engine or HTTP client passed in is used as-is and left open on shutdown;
    anything not passed in is created at startup and closed on shutdown.
    """

    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Monthly sales analytics over product transactions",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine) if engine is not None else None
    app.state.http_client = http_client

    app.add_middleware(RequestLogMiddleware)

    # Add CORS middleware
    if settings.ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.ALLOWED_ORIGINS,
            allow_credentials=settings.ALLOW_CREDENTIALS,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health", response_model=HealthCheckResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthCheckResponse(status="healthy", version=settings.APP_VERSION)

    return app


app = create_application()
