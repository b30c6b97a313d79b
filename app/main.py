from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.config import Settings, get_settings
from app.core.constants import API_VERSION
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging
from app.database import create_session_factory, create_store_engine
from app.database.migrations import apply_migrations
from app.routers import (
    books_router,
    clients_router,
    coffees_router,
    health_router,
    history_router,
    rolls_router,
    sales_router,
    stats_router,
)

ENDPOINTS = [
    "GET /rollos",
    "POST /rollos",
    "PUT /rollos/:id",
    "DELETE /rollos/:id",
    "GET /libros",
    "POST /libros",
    "GET /cafes",
    "POST /cafes",
    "GET /clientes",
    "POST /clientes",
    "POST /ventas",
    "GET /ventas",
    "GET /historial/:id",
    "GET /historial/:tipo/:id",
    "GET /estadisticas/ventas",
    "GET /estadisticas/inventario",
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    engine = create_store_engine(
        settings.database_url(),
        busy_timeout_seconds=settings.SQLITE_BUSY_TIMEOUT_SECONDS,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        apply_migrations(engine)
        try:
            yield
        finally:
            engine.dispose()

    application = FastAPI(title=settings.APP_NAME, version=API_VERSION, lifespan=lifespan)
    application.state.settings = settings
    application.state.engine = engine
    application.state.session_factory = create_session_factory(engine)
    register_error_handlers(application)

    application.include_router(health_router)
    application.include_router(rolls_router)
    application.include_router(books_router)
    application.include_router(coffees_router)
    application.include_router(clients_router)
    application.include_router(sales_router)
    application.include_router(history_router)
    application.include_router(stats_router)

    @application.get("/")
    def root():
        return {
            "message": "{} activa".format(settings.APP_NAME),
            "version": API_VERSION,
            "environment": settings.ENVIRONMENT,
            "endpoints": ENDPOINTS,
        }

    return application


app = create_app()


__all__ = ["app", "create_app"]
