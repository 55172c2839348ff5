"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gym_tracker.api.v1 import api_router
from gym_tracker.core.config import get_settings
from gym_tracker.core.errors import (
    ConflictError,
    IncompleteSelectionError,
    InvalidSelectionError,
    StorageError,
    UnknownMachineError,
)
from gym_tracker.db.session import engine
from gym_tracker.services.catalog import get_catalog

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load the machine catalog; shutdown: dispose the engine."""
    # Schema is managed by Alembic (alembic upgrade head)
    get_catalog()
    yield
    await engine.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(IncompleteSelectionError)
    async def incomplete_selection(request: Request, exc: IncompleteSelectionError):
        return JSONResponse(
            status_code=409,
            content={"detail": str(exc), "missing": exc.missing, "options": exc.options},
        )

    @app.exception_handler(InvalidSelectionError)
    async def invalid_selection(request: Request, exc: InvalidSelectionError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(UnknownMachineError)
    async def unknown_machine(request: Request, exc: UnknownMachineError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConflictError)
    async def conflict(request: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content={"detail": "Conflicts with stored data"})

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


def create_application() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
