import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import engine
from logging_config import setup_logging
from api.applications import router as applications_router
from api.errors import register_error_handlers
from services.registry import ApplicationRegistry
from stores import ApplicationStore, MemoryApplicationStore, SqlApplicationStore

logger = logging.getLogger(__name__)


def build_store() -> ApplicationStore:
    if settings.store_backend == "memory":
        return MemoryApplicationStore()
    return SqlApplicationStore(engine)


def create_app(store: ApplicationStore | None = None) -> FastAPI:
    """Build the API around the given store, or the one selected by settings."""
    setup_logging(settings.log_level, settings.log_file)
    store = store if store is not None else build_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s with %s", settings.app_name, type(store).__name__)
        await store.startup()
        yield
        await store.shutdown()

    app = FastAPI(
        title=settings.app_name,
        description="Loan application submission and tracking API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.registry = ApplicationRegistry(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(applications_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
