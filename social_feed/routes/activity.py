"""
FastAPI route for a user's enriched activity history.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from social_feed.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from social_feed.db import get_db
from social_feed.models import ActivityType
from social_feed.schemas import ActivityDetail, ActivityOut, ActivityPage
from social_feed.security import get_current_user
from social_feed.services.activity import list_user_activity

router = APIRouter(prefix="/users", tags=["activity"], dependencies=[Depends(get_current_user)])


@router.get("/{user_id}/activity", response_model=ActivityPage, response_model_exclude_none=True)
def read_user_activity(
    user_id: int = Path(..., ge=1, description="User whose activity to list"),
    activity_type: Optional[ActivityType] = Query(None, alias="activityType"),
    start_date: Optional[datetime] = Query(None, alias="startDate", description="Inclusive lower bound (ISO 8601)"),
    end_date: Optional[datetime] = Query(None, alias="endDate", description="Inclusive upper bound (ISO 8601)"),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> ActivityPage:
    """
    List a user's activity, newest first.

    Each entry's detail holds the entity it refers to: ``post`` for
    POST_CREATE, ``like`` (with its post) for POST_LIKE, ``follow`` (with the
    followed user) for USER_FOLLOW and ``followed`` for USER_UNFOLLOW. The
    detail is empty when that entity has since been deleted.
    """
    page = list_user_activity(
        db,
        user_id,
        limit=limit,
        offset=offset,
        activity_type=activity_type,
        start_date=start_date,
        end_date=end_date,
    )
    data = [
        ActivityOut(id=a.id, type=a.type, created_at=a.created_at, detail=ActivityDetail(**a.detail))
        for a in page.items
    ]
    return ActivityPage(data=data, meta=page.meta)
