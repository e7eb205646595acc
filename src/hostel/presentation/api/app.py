"""FastAPI application for hostel account authentication.

Routes live under ``/api/v1/auth``. ``/health`` and ``/`` stay unversioned
so that load balancers and the frontend can probe them without a prefix.

Run with::

    uvicorn hostel.presentation.api.app:app
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hostel.infrastructure.persistence.sqlalchemy.models import Base
from hostel.presentation.api.dependencies import get_engine
from hostel.presentation.api.exception_handlers import setup_exception_handlers
from hostel.presentation.api.routers import auth_router
from hostel_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

_APP_LOGGERS = ("hostel", "hostel_auth", "hostel_config")
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx", "httpcore")

AUTH_TAG_DESCRIPTION = """Registration, e-mail verification and sessions.

* Only `@nitm.ac.in` addresses may register (the domain is configurable).
* A 5-digit code is e-mailed on registration and expires after 15 minutes.
* Login, verification and password reset set an HttpOnly `token` cookie;
  the same token is accepted as `Authorization: Bearer <token>`.
* Forgot-password e-mails a single-use reset link valid for 15 minutes.
"""


@lru_cache(maxsize=1)
def _configure_logging(log_level_name: str) -> None:
    """Set up console logging once per process."""
    level = logging.getLevelName(log_level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in _APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Create the account schema on startup and release the pool on exit."""
    settings = get_settings()
    logger.info(
        "Starting %s API v%s (mail delivery %s)",
        settings.app_name,
        API_VERSION,
        "enabled" if settings.smtp_enabled else "disabled",
    )

    engine = get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (ConnectionRefusedError, OSError):
        logger.critical(
            "Database unreachable at %s:%s",
            settings.postgres_host,
            settings.postgres_port,
        )
        raise SystemExit(1) from None
    logger.info("Account schema ready")

    yield

    await engine.dispose()
    logger.info("Database pool disposed, shutdown complete")


def create_v1_router() -> APIRouter:
    """Collect all versioned routers."""
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Parameters
    ----------
    settings
        Settings to use instead of the cached environment settings.

    Returns
    -------
    The application with middleware, error handlers and routes attached.
    """
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    docs_enabled = settings.api_debug
    app = FastAPI(
        title=f"{settings.app_name} Auth API",
        description="Account registration, verification and login for hostel residents.",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Authentication", "description": AUTH_TAG_DESCRIPTION},
            {"name": "Health", "description": "Liveness and database checks."},
        ],
    )

    # Cookies are only sent cross-origin with credentials enabled
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Liveness probe. Does not touch the database."""
        return {"status": "healthy", "version": API_VERSION}

    @app.get("/health/db", tags=["Health"])
    async def database_health_check() -> JSONResponse:
        """Readiness probe that runs ``SELECT 1`` against the account store."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database health check failed: %s", e)
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable", "database": "unreachable"},
            )
        return JSONResponse(content={"status": "healthy", "database": "reachable"})

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        auth_base = f"{API_V1_PREFIX}/auth"
        return {
            "name": settings.app_name,
            "version": API_VERSION,
            "docs": "/docs" if docs_enabled else None,
            "auth": {
                "register": f"{auth_base}/register",
                "verify": f"{auth_base}/otp/verify",
                "login": f"{auth_base}/login",
                "logout": f"{auth_base}/logout",
                "me": f"{auth_base}/me",
            },
        }

    return app


app = create_app()
