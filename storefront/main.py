from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .logging_config import setup_logging

logger = logging.getLogger("storefront.core")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_DIR)

    from .admin.router import router as admin_router
    from .catalog import router as catalog_router, startup_catalog
    from .catalog.persistence import FileSlot
    from .catalog.service import CatalogStore
    from .uploads.router import router as uploads_router

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Running application startup tasks")
        startup_catalog(app.state.catalog_store)
        logger.info("Catalog loaded: %s", app.state.catalog_store.status().model_dump())
        yield
        logger.info("Storefront backend stopping")

    app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)
    app.state.settings = settings
    app.state.catalog_store = CatalogStore(FileSlot(settings.DATA_DIR, settings.STORAGE_KEY))
    logger.info("Storefront backend starting")

    app.include_router(catalog_router, prefix="/api", tags=["catalog"])
    app.include_router(admin_router, prefix="/api", tags=["admin"])
    app.include_router(uploads_router, prefix="/api", tags=["uploads"])

    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=str(settings.UPLOAD_DIR)), name="uploads")
    logger.info("Mounted routers and upload directory %s", settings.UPLOAD_DIR)

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "service": "storefront"}

    return app
