import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator

from src.taskhub.api.middlewares import setup_middlewares
from src.taskhub.api.v1.router import api_router
from src.taskhub.core.config import Settings, get_settings
from src.taskhub.core.db import Database
from src.taskhub.core.exceptions import setup_exception_handlers
from src.taskhub.core.logging import get_logger, setup_logging
from src.taskhub.services.bootstrap import ensure_super_admin

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "auth", "description": "Tenant registration, login and the current profile"},
    {"name": "tenants", "description": "Tenant details, updates and tenant-scoped users"},
    {"name": "users", "description": "User updates and deletion"},
    {"name": "projects", "description": "Projects and their tasks"},
    {"name": "tasks", "description": "Task updates"},
    {"name": "health", "description": "Service health"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown.

    The Database handle (engine and pool) is created here unless one was
    injected through create_app(), and is disposed at shutdown either way.
    """
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    if getattr(app.state, "db", None) is None:
        app.state.db = Database.from_settings(settings)
    database: Database = app.state.db

    async with database.session() as session:
        await ensure_super_admin(session, settings)

    yield

    logger.info("Closing connections...")
    await database.dispose()
    logger.info("Shutdown complete")


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Prometheus metrics on /metrics, protected by X-Metrics-Key when configured."""
    instrumentator = Instrumentator().instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(
            app,
            endpoint="/metrics",
            include_in_schema=False,
            dependencies=[Depends(verify_metrics_key)],
        )
    else:
        instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)


def create_app(database: Database | None = None) -> FastAPI:
    """Build the application.

    Args:
        database: Pre-built Database handle (tests pass one bound to their
            own engine). When omitted, the lifespan creates it from settings.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant project and task management API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )
    app.state.db = database

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)
    setup_metrics(app, settings)

    return app


app = create_app()
