# roadmap_visualizer/main.py

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roadmap_visualizer.config import setup_json_logging, settings
from roadmap_visualizer.db.session import init_db
from roadmap_visualizer.api.routes.roadmaps import router as roadmaps_router
from roadmap_visualizer.api.routes.dependencies import router as dependencies_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("app.startup", extra={"reason": f"env={settings.ENV}"})
    yield


def create_app() -> FastAPI:
    setup_json_logging(log_level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO))

    app = FastAPI(
        title="Roadmap Visualizer API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.include_router(roadmaps_router)
    app.include_router(dependencies_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/ready")
    def ready():
        return {"ready": True}

    return app


app = create_app()
