"""FastAPI application factory and server entrypoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from flatblog.api import ALLOWED_METHODS, posts_http_exception_handler
from flatblog.api import router as posts_router
from flatblog.concurrency import MemoryLock
from flatblog.config import Settings
from flatblog.post_store import PostStore
from flatblog.telemetry import configure_logging, init_telemetry, shutdown_telemetry

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    init_telemetry()
    store: PostStore = app.state.store
    if settings.create_store_if_missing:
        store.ensure_exists()
    await log.ainfo(
        "service started",
        posts_path=str(store.path),
        serialize_writes=store.serialized,
    )
    yield
    await app.state.write_locks.aclose()
    await log.ainfo("service stopped")
    shutdown_telemetry()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its store, write locks and CORS policy."""
    settings = settings or Settings()
    app = FastAPI(title="flatblog", lifespan=lifespan)

    app.state.settings = settings
    app.state.write_locks = MemoryLock()
    app.state.store = PostStore(
        settings.posts_path,
        locks=app.state.write_locks if settings.serialize_writes else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=list(ALLOWED_METHODS),
        allow_headers=["Content-Type"],
    )
    app.include_router(posts_router)
    app.add_exception_handler(StarletteHTTPException, posts_http_exception_handler)
    FastAPIInstrumentor.instrument_app(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def serve() -> None:
    """Run the backend with uvicorn using environment configuration."""
    settings = Settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        log_config=None,
    )
