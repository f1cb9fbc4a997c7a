"""
Application factory.

    uvicorn hotel_listing.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hotel_listing.api.error_handlers import register_exception_handlers
from hotel_listing.api.v1 import api_router
from hotel_listing.config.settings import Settings, get_settings
from hotel_listing.core.logging import RequestIDMiddleware, setup_logging
from hotel_listing.utils.logging import get_project_name, get_project_version

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.DB_CREATE_ALL:
            # imported lazily so building the app never opens a connection
            from hotel_listing.database.session import create_all

            await create_all()
            logger.info("app.startup.tables_created")
        logger.info("app.startup", extra={"env": settings.ENV})
        yield
        logger.info("app.shutdown")

    app = FastAPI(
        title=get_project_name(),
        version=get_project_version(),
        lifespan=lifespan,
    )

    # last added runs first: request id is bound before errors are translated and logged
    register_exception_handlers(app)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("hotel_listing.main:app", host="0.0.0.0", port=8000)
