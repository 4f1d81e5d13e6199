"""Likes: one per (user, post), each creation logged as POST_LIKE."""

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from social_feed.errors import DuplicateError, NotFoundError, PermissionDeniedError
from social_feed.models import ActivityLog, Like, LikeRef, Post
from social_feed.services.pagination import Page, newest_first, paginate
from social_feed.services.serializers import like_record

logger = logging.getLogger(__name__)


def _already_liked(db: Session, user_id: int, post_id: int) -> bool:
    return db.query(Like).filter(Like.user_id == user_id, Like.post_id == post_id).first() is not None


def create_like(db: Session, user_id: int, post_id: int) -> Dict[str, Any]:
    if not db.query(Post).filter(Post.id == post_id).first():
        raise NotFoundError("Post not found")

    if _already_liked(db, user_id, post_id):
        logger.info("User %s already liked post %s", user_id, post_id)
        raise DuplicateError("You have already liked this post")

    like = Like(user_id=user_id, post_id=post_id)
    db.add(like)
    try:
        db.flush()
    except IntegrityError:
        # uq_likes_pair: same pair inserted since the check
        db.rollback()
        logger.info("User %s already liked post %s (unique constraint)", user_id, post_id)
        raise DuplicateError("You have already liked this post")
    db.add(ActivityLog.record(user_id, LikeRef(like.id)))
    db.commit()
    db.refresh(like)

    logger.info("Like %s created: user %s -> post %s", like.id, user_id, post_id)
    return like_record(like)


def list_likes(db: Session) -> List[Dict[str, Any]]:
    likes = (
        db.query(Like)
        .options(selectinload(Like.user), selectinload(Like.post))
        .order_by(*newest_first(Like))
        .all()
    )
    return [like_record(like, with_user=True, with_post=True) for like in likes]


def get_like(db: Session, like_id: int) -> Dict[str, Any]:
    like = (
        db.query(Like)
        .options(selectinload(Like.user), selectinload(Like.post))
        .filter(Like.id == like_id)
        .first()
    )
    if not like:
        raise NotFoundError("Like not found")
    return like_record(like, with_user=True, with_post=True)


def likes_by_post(db: Session, post_id: int, limit: int, offset: int) -> Page:
    if not db.query(Post).filter(Post.id == post_id).first():
        raise NotFoundError("Post not found")

    query = db.query(Like).options(selectinload(Like.user)).filter(Like.post_id == post_id)
    page = paginate(query, limit, offset, newest_first(Like))
    page.items = [like_record(like, with_user=True) for like in page.items]
    return page


def delete_like(db: Session, user_id: int, like_id: int) -> None:
    like = db.query(Like).filter(Like.id == like_id).first()
    if not like:
        raise NotFoundError("Like not found")
    if like.user_id != user_id:
        logger.info("User %s not authorized to delete like %s", user_id, like_id)
        raise PermissionDeniedError("You can only delete your own likes")

    db.delete(like)
    db.commit()
    logger.info("Like %s deleted", like_id)
