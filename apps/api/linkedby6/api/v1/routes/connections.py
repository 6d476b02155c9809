from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from linkedby6.api.v1.deps import get_db, get_settings_dep
from linkedby6.api.v1.schemas import ConnectionGraphOut, ConnectionPathResponse, NormalizePathRequest
from linkedby6.core.config import Settings
from linkedby6.db.pg.models import UserProfile
from linkedby6.services.connections.graph_view import build_connection_graph
from linkedby6.services.connections.tracker import ConnectionPathState, get_tracker
from linkedby6.services.profiles.recommendations import get_business_profile, get_user_profile

router = APIRouter(prefix="/connections", tags=["connections"])
logger = logging.getLogger(__name__)


def require_user(db: Session, user_id: str) -> UserProfile:
    user = get_user_profile(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def connection_response(
    state: ConnectionPathState,
    *,
    user: UserProfile,
    business_name: str | None,
    settings: Settings,
) -> ConnectionPathResponse:
    graph: ConnectionGraphOut | None = None
    if state.found and state.response is not None:
        built = build_connection_graph(
            state.response,
            business_name=business_name,
            current_user_full_name=user.full_name,
            current_user_phone_number=user.phone_number,
            max_placeholders=settings.fallback_max_placeholders,
        )
        graph = ConnectionGraphOut(**built.to_dict())
    return ConnectionPathResponse(
        business_id=state.business_id,
        business_name=business_name,
        loading=state.loading,
        found=state.found,
        message=state.message,
        graph=graph,
    )


@router.post("/normalize", response_model=ConnectionGraphOut)
def normalize_connection_path(
    payload: NormalizePathRequest,
    settings: Settings = Depends(get_settings_dep),
) -> ConnectionGraphOut:
    built = build_connection_graph(
        payload.path_data,
        business_name=payload.business_name,
        current_user_full_name=payload.current_user_full_name,
        current_user_phone_number=payload.current_user_phone_number,
        max_placeholders=settings.fallback_max_placeholders,
    )
    return ConnectionGraphOut(**built.to_dict(), compact=payload.compact)


@router.get("/{business_id}", response_model=ConnectionPathResponse)
def get_connection_path(
    business_id: str,
    user_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
) -> ConnectionPathResponse:
    user = require_user(db, user_id)
    business = get_business_profile(db, business_id)
    state = get_tracker(user.user_id).ensure(business_id, user.phone_number)
    return connection_response(
        state,
        user=user,
        business_name=business.business_name if business else None,
        settings=settings,
    )


@router.post("/{business_id}/retry", response_model=ConnectionPathResponse)
def retry_connection_path(
    business_id: str,
    user_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
) -> ConnectionPathResponse:
    user = require_user(db, user_id)
    business = get_business_profile(db, business_id)
    logger.info("connection_path_retry_requested", extra={"user_id": user_id, "business_id": business_id})
    state = get_tracker(user.user_id).retry(business_id, user.phone_number)
    return connection_response(
        state,
        user=user,
        business_name=business.business_name if business else None,
        settings=settings,
    )
