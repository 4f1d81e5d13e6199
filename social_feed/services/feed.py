"""Home feed: posts by the user and everyone they follow, newest first."""

import logging
from typing import Set

from sqlalchemy.orm import Session

from social_feed.models import Follow, Post
from social_feed.services.pagination import Page, newest_first, paginate
from social_feed.services.posts import post_records, with_post_relations

logger = logging.getLogger(__name__)


def resolve_feed_sources(db: Session, user_id: int) -> Set[int]:
    """
    Resolve whose posts belong in a user's feed.

    Args:
        db: Database session
        user_id: Feed owner; existence is the caller's responsibility

    Returns:
        Ids of every user followed by user_id, plus user_id itself
    """
    rows = db.query(Follow.followed_id).filter(Follow.follower_id == user_id).all()
    sources = {followed_id for (followed_id,) in rows}
    sources.add(user_id)
    return sources


def get_feed(db: Session, user_id: int, limit: int, offset: int) -> Page:
    """
    Assemble one page of a user's feed.

    Each item carries its author summary, like count and ordered hashtag
    names. The page total counts every matching post, not just this window.
    """
    sources = resolve_feed_sources(db, user_id)
    logger.info("Feed for user %s drawing from %d users (limit=%s, offset=%s)", user_id, len(sources), limit, offset)

    query = with_post_relations(db.query(Post)).filter(Post.user_id.in_(sources))
    page = paginate(query, limit, offset, newest_first(Post))
    page.items = post_records(db, page.items)

    logger.info("Feed for user %s: %d posts returned (total: %d)", user_id, len(page.items), page.total)
    return page
