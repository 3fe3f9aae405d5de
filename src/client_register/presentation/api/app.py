"""FastAPI application factory.

Routes are served under ``/api/v1``; ``/health`` stays unversioned for
load balancers.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from client_register.infrastructure.persistence.sqlalchemy.models import Base
from client_register.presentation.api.dependencies import (
    get_credential_service,
    get_engine,
)
from client_register.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from client_register.presentation.api.routers import users_router
from register_config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite")


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Route all logs to stdout once per process, at LOG_LEVEL."""
    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in ("client_register", "register_auth"):
        logging.getLogger(name).setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Users",
        "description": (
            "Registration, login and the current user. Passwords must match "
            "the configured format and are stored only as bcrypt hashes. "
            "Every successful call returns the user with a signed JWT."
        ),
    },
    {
        "name": "Health",
        "description": "Liveness probe.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Starting Client Register API v%s", API_VERSION)
    # Raises on a blank signing key or an uncompilable password pattern
    get_credential_service()

    engine = get_engine()
    await _create_schema(engine)
    yield

    await engine.dispose()
    logger.info("Client Register API stopped")


async def _create_schema(engine: AsyncEngine) -> None:
    """Create missing tables; exit if the database is unreachable."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Database refused the connection")
        raise SystemExit(1) from None

    logger.info("Database schema ready")


def create_v1_router() -> APIRouter:
    v1_router = APIRouter()
    v1_router.include_router(users_router, prefix="/users", tags=["Users"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Parameters
    ----------
    settings
        Settings to use instead of the cached process settings.

    Returns
    -------
    The configured application.
    """
    _configure_logging()
    settings = settings or get_settings()
    docs_enabled = settings.api_debug

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="User registration with password policy and JWT issuance.",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        return {"status": "healthy", "version": API_VERSION}

    return app


# Application instance for uvicorn
app = create_app()
