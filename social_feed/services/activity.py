"""
Activity log listing and enrichment.

Each activity row is a flat (activity_type, entity_id) pair. Enrichment
turns the row back into its typed reference (see ``social_feed.models.ActivityRef``)
and resolves that reference to a detail payload with a single point lookup.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from sqlalchemy.orm import Session, selectinload

from social_feed.errors import NotFoundError, ValidationFailedError
from social_feed.models import (
    ActivityLog, ActivityRef, ActivityType, Follow, FollowRef, Like, LikeRef, Post, PostRef, User, UserRef
)
from social_feed.services.pagination import Page, newest_first, paginate
from social_feed.services.serializers import follow_record, like_record, post_fields, user_summary

logger = logging.getLogger(__name__)


@dataclass
class EnrichedActivity:
    """An activity row with its reference resolved; detail is empty when the target is gone."""
    id: int
    type: ActivityType
    created_at: datetime
    detail: Dict[str, Any]


def _post_detail(db: Session, post_id: int) -> Dict[str, Any]:
    post = db.query(Post).filter(Post.id == post_id).first()
    return {"post": post_fields(post)} if post else {}


def _like_detail(db: Session, like_id: int) -> Dict[str, Any]:
    like = db.query(Like).options(selectinload(Like.post)).filter(Like.id == like_id).first()
    return {"like": like_record(like, with_post=True)} if like else {}


def _follow_detail(db: Session, follow_id: int) -> Dict[str, Any]:
    follow = db.query(Follow).options(selectinload(Follow.followed)).filter(Follow.id == follow_id).first()
    return {"follow": follow_record(follow, with_followed=True)} if follow else {}


def _unfollowed_user_detail(db: Session, user_id: int) -> Dict[str, Any]:
    user = db.query(User).filter(User.id == user_id).first()
    return {"followed": user_summary(user)} if user else {}


DETAIL_RESOLVERS: Dict[Type[ActivityRef], Callable[[Session, int], Dict[str, Any]]] = {
    PostRef: _post_detail,
    LikeRef: _like_detail,
    FollowRef: _follow_detail,
    UserRef: _unfollowed_user_detail,
}


def enrich_activity(db: Session, row: ActivityLog) -> EnrichedActivity:
    ref = row.ref
    detail = DETAIL_RESOLVERS[type(ref)](db, ref.entity_id)
    if not detail:
        logger.debug("Activity %s: %s %s no longer exists", row.id, type(ref).__name__, ref.entity_id)
    return EnrichedActivity(id=row.id, type=ref.activity_type, created_at=row.created_at, detail=detail)


def enrich_activity_page(db: Session, rows: Sequence[ActivityLog]) -> List[EnrichedActivity]:
    """
    Enrich a page of activity rows.

    Output order and length match the input; rows are resolved one at a time.

    Args:
        db: Database session
        rows: Activity rows, already ordered by the query layer

    Returns:
        One EnrichedActivity per input row
    """
    return [enrich_activity(db, row) for row in rows]


def _as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # stored timestamps are naive UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def list_user_activity(
    db: Session,
    user_id: int,
    limit: int,
    offset: int,
    activity_type: Optional[ActivityType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Page:
    """
    List a user's activity newest first, enriched.

    Args:
        db: Database session
        user_id: Whose activity to list
        limit: Page size
        offset: Rows to skip
        activity_type: Only rows of this type, when given
        start_date: Inclusive lower bound on creation time
        end_date: Inclusive upper bound on creation time

    Returns:
        Page of EnrichedActivity; total counts every matching row

    Raises:
        ValidationFailedError: end_date precedes start_date
        NotFoundError: user_id names no user
    """
    start_date, end_date = _as_naive_utc(start_date), _as_naive_utc(end_date)
    if start_date and end_date and end_date < start_date:
        raise ValidationFailedError("endDate must not be earlier than startDate")

    if not db.query(User).filter(User.id == user_id).first():
        logger.info("User with ID %s not found", user_id)
        raise NotFoundError("User not found")

    query = db.query(ActivityLog).filter(ActivityLog.user_id == user_id)
    if activity_type:
        query = query.filter(ActivityLog.activity_type == activity_type)
    if start_date:
        query = query.filter(ActivityLog.created_at >= start_date)
    if end_date:
        query = query.filter(ActivityLog.created_at <= end_date)

    page = paginate(query, limit, offset, newest_first(ActivityLog))
    page.items = enrich_activity_page(db, page.items)

    logger.info("Activity for user %s: %d rows returned (total: %d)", user_id, len(page.items), page.total)
    return page
