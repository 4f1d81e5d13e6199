"""
FastAPI route for the authenticated user's home feed.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from social_feed.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from social_feed.db import get_db
from social_feed.models import User
from social_feed.schemas import PostPage
from social_feed.security import get_current_user
from social_feed.services.feed import get_feed

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=PostPage)
def read_feed(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT, description="Page size (1-100)"),
    offset: int = Query(0, ge=0, description="Posts to skip"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PostPage:
    """
    Get posts by the current user and everyone they follow, newest first.

    Each post includes its author, hashtags and like count; meta.total is
    the number of matching posts before paging.
    """
    page = get_feed(db, current_user.id, limit=limit, offset=offset)
    return PostPage(data=page.items, meta=page.meta)
