"""Follow edges between users and their activity logging."""

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from social_feed.errors import DuplicateError, NotFoundError, PermissionDeniedError, ValidationFailedError
from social_feed.models import ActivityLog, Follow, FollowRef, User, UserRef
from social_feed.services.pagination import Page, newest_first, paginate
from social_feed.services.serializers import follow_entry, follow_record

logger = logging.getLogger(__name__)


def _require_user(db: Session, user_id: int, message: str = "User not found") -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(message)
    return user


def _already_following(db: Session, follower_id: int, followed_id: int) -> bool:
    return (
        db.query(Follow)
        .filter(Follow.follower_id == follower_id, Follow.followed_id == followed_id)
        .first()
        is not None
    )


def create_follow(db: Session, follower_id: int, followed_id: int) -> Dict[str, Any]:
    """Create a follower -> followed edge and log USER_FOLLOW against the new edge."""
    if follower_id == followed_id:
        raise ValidationFailedError("You cannot follow yourself")

    _require_user(db, followed_id, "User to follow not found")

    if _already_following(db, follower_id, followed_id):
        raise DuplicateError("You are already following this user")

    follow = Follow(follower_id=follower_id, followed_id=followed_id)
    db.add(follow)
    try:
        db.flush()
    except IntegrityError:
        # uq_follows_pair: same edge inserted since the check
        db.rollback()
        logger.info("User %s already follows user %s (unique constraint)", follower_id, followed_id)
        raise DuplicateError("You are already following this user")
    db.add(ActivityLog.record(follower_id, FollowRef(follow.id)))
    db.commit()
    db.refresh(follow)

    logger.info("Follow %s created: user %s -> user %s", follow.id, follower_id, followed_id)
    return follow_record(follow)


def list_follows(db: Session) -> List[Dict[str, Any]]:
    follows = (
        db.query(Follow)
        .options(selectinload(Follow.follower), selectinload(Follow.followed))
        .order_by(*newest_first(Follow))
        .all()
    )
    return [follow_record(f, with_follower=True, with_followed=True) for f in follows]


def get_follow(db: Session, follow_id: int) -> Dict[str, Any]:
    follow = (
        db.query(Follow)
        .options(selectinload(Follow.follower), selectinload(Follow.followed))
        .filter(Follow.id == follow_id)
        .first()
    )
    if not follow:
        raise NotFoundError("Follow relationship not found")
    return follow_record(follow, with_follower=True, with_followed=True)


def delete_follow(db: Session, user_id: int, follow_id: int) -> None:
    """
    Unfollow: remove the edge and log USER_UNFOLLOW.

    The log row references the unfollowed user rather than the edge, since
    the edge is gone once this commits.
    """
    follow = db.query(Follow).filter(Follow.id == follow_id).first()
    if not follow:
        raise NotFoundError("Follow relationship not found")
    if follow.follower_id != user_id:
        logger.info("User %s not authorized to delete follow %s", user_id, follow_id)
        raise PermissionDeniedError("You can only unfollow users that you follow")

    followed_id = follow.followed_id
    db.add(ActivityLog.record(user_id, UserRef(followed_id)))
    db.delete(follow)
    db.commit()
    logger.info("Follow %s deleted: user %s unfollowed user %s", follow_id, user_id, followed_id)


def get_followers(db: Session, user_id: int, limit: int, offset: int) -> Page:
    """Users following user_id, most recent first."""
    _require_user(db, user_id)
    query = db.query(Follow).options(selectinload(Follow.follower)).filter(Follow.followed_id == user_id)
    page = paginate(query, limit, offset, newest_first(Follow))
    page.items = [follow_entry(f, f.follower) for f in page.items]
    return page


def get_following(db: Session, user_id: int, limit: int, offset: int) -> Page:
    """Users that user_id follows, most recent first."""
    _require_user(db, user_id)
    query = db.query(Follow).options(selectinload(Follow.followed)).filter(Follow.follower_id == user_id)
    page = paginate(query, limit, offset, newest_first(Follow))
    page.items = [follow_entry(f, f.followed) for f in page.items]
    return page
