"""FastAPI application entry point."""
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from quarion.config import get_settings
from quarion.interfaces.api.v1.router import v1_router
from quarion.logging_config import set_request_id, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: storage dir and (when configured) the connection pool
    settings = get_settings()
    settings.storage_path.mkdir(parents=True, exist_ok=True)
    if settings.uses_database:
        from quarion.infrastructure.database.connection import get_engine
        get_engine()
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    # Shutdown: clean up
    if settings.uses_database:
        from quarion.infrastructure.database.connection import dispose_engine
        await dispose_engine()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Slip OCR and income/expense tracking API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        set_request_id(request_id)
        started = time.perf_counter()
        logger.debug("→ %s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms,
            extra={"extra_fields": {"status_code": response.status_code, "duration_ms": round(elapsed_ms, 1)}},
        )
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(v1_router)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "version": settings.app_version,
            "storage": "database" if settings.uses_database else "memory",
        }

    return app


app = create_app()
