from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from linkedby6.db.pg.models import BusinessProfile, BusinessRecommendation, UserProfile


def get_user_profile(db: Session, user_id: str) -> UserProfile | None:
    return db.get(UserProfile, user_id)


def get_business_profile(db: Session, business_id: str) -> BusinessProfile | None:
    return db.get(BusinessProfile, business_id)


def list_recommended_businesses(db: Session, user_id: str) -> list[BusinessProfile]:
    rows = db.scalars(
        select(BusinessProfile)
        .join(BusinessRecommendation, BusinessRecommendation.business_id == BusinessProfile.business_id)
        .where(BusinessRecommendation.user_id == user_id)
        .order_by(BusinessRecommendation.created_at.desc(), BusinessProfile.business_name)
    ).all()
    return list(rows)


def is_recommended(db: Session, user_id: str, business_id: str) -> bool:
    row = db.scalar(
        select(BusinessRecommendation.id).where(
            BusinessRecommendation.user_id == user_id,
            BusinessRecommendation.business_id == business_id,
        )
    )
    return row is not None


def add_recommendation(db: Session, user_id: str, business_id: str) -> bool:
    """Returns True when a new recommendation row was written."""
    if is_recommended(db, user_id, business_id):
        return False
    db.add(BusinessRecommendation(user_id=user_id, business_id=business_id))
    db.commit()
    return True


def remove_recommendation(db: Session, user_id: str, business_id: str) -> bool:
    result = db.execute(
        delete(BusinessRecommendation).where(
            BusinessRecommendation.user_id == user_id,
            BusinessRecommendation.business_id == business_id,
        )
    )
    db.commit()
    return bool(result.rowcount)
