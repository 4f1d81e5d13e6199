"""Post authoring and listing, including hashtag linking and like counts."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, selectinload

from social_feed.errors import NotFoundError, PermissionDeniedError
from social_feed.models import ActivityLog, Hashtag, Like, Post, PostHashtag, PostRef
from social_feed.services.hashtags import get_or_create_hashtag, normalize_tag
from social_feed.services.pagination import Page, newest_first, paginate
from social_feed.services.serializers import post_record

logger = logging.getLogger(__name__)


def with_post_relations(query: Query) -> Query:
    """Eager-load the author and the ordered hashtag links."""
    return query.options(
        selectinload(Post.user),
        selectinload(Post.hashtags).selectinload(PostHashtag.hashtag),
    )


def like_counts(db: Session, post_ids: Sequence[int]) -> Dict[int, int]:
    """Like totals for a set of posts, in one grouped query."""
    if not post_ids:
        return {}
    rows = (
        db.query(Like.post_id, func.count(Like.id))
        .filter(Like.post_id.in_(post_ids))
        .group_by(Like.post_id)
        .all()
    )
    return {post_id: count for post_id, count in rows}


def post_records(db: Session, posts: Iterable[Post]) -> List[Dict[str, Any]]:
    posts = list(posts)
    counts = like_counts(db, [p.id for p in posts])
    return [post_record(p, counts.get(p.id, 0)) for p in posts]


def _unique_tags(names: Optional[Iterable[str]]) -> List[str]:
    # first occurrence wins, so order is preserved
    return list(dict.fromkeys(normalize_tag(n) for n in names or []))


def _owned_post(db: Session, user_id: int, post_id: int, action: str) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise NotFoundError("Post not found")
    if post.user_id != user_id:
        logger.info("User %s not authorized to %s post %s", user_id, action, post_id)
        raise PermissionDeniedError(f"You can only {action} your own posts")
    return post


def create_post(db: Session, user_id: int, content: str, hashtags: Optional[List[str]] = None) -> Dict[str, Any]:
    """
    Create a post, link its hashtags in the given order and log POST_CREATE.

    Hashtags seen for the first time are committed up front. The post, its
    hashtag links and the activity row are then committed together.
    """
    tags = [get_or_create_hashtag(db, name) for name in _unique_tags(hashtags)]

    post = Post(user_id=user_id, content=content)
    db.add(post)
    db.flush()

    for position, hashtag in enumerate(tags):
        db.add(PostHashtag(post_id=post.id, hashtag_id=hashtag.id, position=position))

    db.add(ActivityLog.record(user_id, PostRef(post.id)))
    db.commit()

    logger.info("Post %s created by user %s with hashtags %s", post.id, user_id, hashtags or [])
    return get_post(db, post.id)


def get_post(db: Session, post_id: int) -> Dict[str, Any]:
    post = with_post_relations(db.query(Post)).filter(Post.id == post_id).first()
    if not post:
        raise NotFoundError("Post not found")
    return post_records(db, [post])[0]


def list_posts(db: Session, limit: int, offset: int) -> Page:
    page = paginate(with_post_relations(db.query(Post)), limit, offset, newest_first(Post))
    page.items = post_records(db, page.items)
    return page


def update_post(db: Session, user_id: int, post_id: int, content: str) -> Dict[str, Any]:
    post = _owned_post(db, user_id, post_id, "update")
    post.content = content
    db.commit()
    logger.info("Post %s updated", post_id)
    return get_post(db, post_id)


def delete_post(db: Session, user_id: int, post_id: int) -> None:
    """Hard delete; likes and hashtag links go with the post, activity rows stay."""
    post = _owned_post(db, user_id, post_id, "delete")
    db.delete(post)
    db.commit()
    logger.info("Post %s deleted", post_id)


def posts_by_hashtag(db: Session, tag: str, limit: int, offset: int) -> Page:
    """Posts carrying a hashtag; an unknown tag is an empty page, not an error."""
    hashtag = db.query(Hashtag).filter(Hashtag.name == normalize_tag(tag)).first()
    if not hashtag:
        logger.info("Hashtag %r not found", tag)
        return Page(items=[], total=0, limit=limit, offset=offset)

    query = with_post_relations(db.query(Post)).join(PostHashtag, PostHashtag.post_id == Post.id).filter(
        PostHashtag.hashtag_id == hashtag.id
    )
    page = paginate(query, limit, offset, newest_first(Post))
    page.items = post_records(db, page.items)
    return page
