from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from linkedby6.api.v1.deps import get_settings_dep
from linkedby6.core.config import Settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health(settings: Settings = Depends(get_settings_dep)) -> dict:
    return {
        "status": "ok",
        "environment": settings.environment,
        "graph_backend": settings.graph_backend,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
