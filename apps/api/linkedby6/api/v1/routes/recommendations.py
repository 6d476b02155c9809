from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from linkedby6.api.v1.deps import get_db, get_settings_dep
from linkedby6.api.v1.routes.connections import connection_response, require_user
from linkedby6.api.v1.schemas import (
    RecommendationRequest,
    RecommendationToggleResponse,
    RecommendedBusinessOut,
)
from linkedby6.core.config import Settings
from linkedby6.services.connections.tracker import get_tracker
from linkedby6.services.profiles.recommendations import (
    add_recommendation,
    get_business_profile,
    list_recommended_businesses,
    remove_recommendation,
)

router = APIRouter(prefix="/users/{user_id}/recommendations", tags=["recommendations"])


@router.get("", response_model=list[RecommendedBusinessOut])
def list_recommendations(
    user_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
) -> list[RecommendedBusinessOut]:
    user = require_user(db, user_id)
    tracker = get_tracker(user_id)
    items: list[RecommendedBusinessOut] = []
    for business in list_recommended_businesses(db, user_id):
        state = tracker.ensure(business.business_id, user.phone_number)
        items.append(
            RecommendedBusinessOut(
                business_id=business.business_id,
                business_name=business.business_name,
                industry=business.industry,
                city=business.city,
                connection=connection_response(
                    state,
                    user=user,
                    business_name=business.business_name,
                    settings=settings,
                ),
            )
        )
    return items


@router.post("", response_model=RecommendationToggleResponse)
def recommend_business(
    user_id: str,
    payload: RecommendationRequest,
    db: Session = Depends(get_db),
) -> RecommendationToggleResponse:
    require_user(db, user_id)
    if get_business_profile(db, payload.business_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Business not found")
    changed = add_recommendation(db, user_id, payload.business_id)
    return RecommendationToggleResponse(
        user_id=user_id,
        business_id=payload.business_id,
        recommended=True,
        changed=changed,
    )


@router.delete("/{business_id}", response_model=RecommendationToggleResponse)
def unrecommend_business(
    user_id: str,
    business_id: str,
    db: Session = Depends(get_db),
) -> RecommendationToggleResponse:
    require_user(db, user_id)
    changed = remove_recommendation(db, user_id, business_id)
    return RecommendationToggleResponse(
        user_id=user_id,
        business_id=business_id,
        recommended=False,
        changed=changed,
    )
