from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkedby6.api.v1.routes import connections, health, recommendations
from linkedby6.core.config import Settings, get_settings
from linkedby6.core.logging import configure_logging
from linkedby6.db.pg import models as _models  # noqa: F401
from linkedby6.db.pg.base import Base
from linkedby6.db.pg.session import engine

logger = logging.getLogger(__name__)

ROUTERS = (health.router, connections.router, recommendations.router)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Base.metadata.create_all(bind=engine)
    logger.info("api_started", extra={"graph_backend": app.state.settings.graph_backend})
    yield


def cors_origins(settings: Settings) -> list[str]:
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    api = FastAPI(title=settings.app_name, lifespan=lifespan)
    api.state.settings = settings

    origins = cors_origins(settings)
    if origins:
        api.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    for router in ROUTERS:
        api.include_router(router, prefix=settings.api_prefix)
    return api


app = create_app()
