"""FastAPI application factory and lifespan."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exceptions import DataSourceUnavailable
from app.core.logging import configure_logging
from app.db.session import create_tables, engine

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: optionally create tables; shutdown: dispose the engine."""
    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ensured")
    yield
    await engine.dispose()


async def data_source_unavailable_handler(request: Request, exc: DataSourceUnavailable) -> JSONResponse:
    logger.error("{} {} failed in {}: {}", request.method, request.url.path, exc.operation, exc)
    return JSONResponse(status_code=503, content={"detail": "Data source unavailable"})


def create_application() -> FastAPI:
    configure_logging(settings.log_level, debug=settings.debug)
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug, localhost in dev, CORS_ORIGINS (comma-separated) otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DataSourceUnavailable, data_source_unavailable_handler)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
