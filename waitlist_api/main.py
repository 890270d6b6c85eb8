import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waitlist_api.features.admin.routes.waitlist import router as admin_waitlist_router
from waitlist_api.features.health.routes.health import router as health_router
from waitlist_api.features.waitlist.routes.waitlist import router as waitlist_router
from waitlist_api.platform.config import Settings, settings as default_settings
from waitlist_api.platform.db.session import Database
from waitlist_api.platform.exceptions import add_exception_handlers
from waitlist_api.platform.logger import LOG_FORMAT

# Configure logging to show INFO level messages
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
        await database.connect()
        app.state.database = database
        logger.info(f"Waitlist API ready, endpoints under {settings.API_PREFIX}")
        try:
            yield
        finally:
            await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Landing page waitlist signups and admin dashboard API",
        version=VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "description": "Waitlist signups for the landing page, with an admin dashboard API.",
            "version": VERSION,
            "docs_url": "/docs",
            "api_base": settings.API_PREFIX,
        }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(health_router, prefix=settings.API_PREFIX)
    app.include_router(waitlist_router, prefix=settings.API_PREFIX)
    app.include_router(admin_waitlist_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
