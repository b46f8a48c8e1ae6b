"""Invoice Dashboard API — application factory and the ASGI app uvicorn serves.

Invariants:
    - Routers are listed explicitly in ROUTERS; nothing is auto-discovered
    - The engine is created in lifespan startup and disposed on shutdown
    - Allowed CORS origins come from Settings only

Run: uvicorn dashboard.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import dashboard.infrastructure.database as database
from dashboard.api.error_handlers import register_error_handlers
from dashboard.api.routes import auth, customers, health, invoices, overview
from dashboard.config import Settings, get_settings
from dashboard.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

ROUTERS = (
    health.router,
    auth.router,
    invoices.router,
    customers.router,
    overview.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"{app.title} {app.version} ready ({manager.engine.url.get_backend_name()})")
    try:
        yield
    finally:
        await manager.dispose()
        logger.info(f"{app.title} stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Invoice Dashboard API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return app


app = create_app()
