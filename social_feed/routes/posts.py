"""
FastAPI routes for creating, reading, editing and deleting posts.
"""
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from social_feed.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from social_feed.db import get_db
from social_feed.models import User
from social_feed.schemas import TAG_PATTERN, PostCreateRequest, PostOut, PostPage, PostUpdateRequest
from social_feed.security import get_current_user
from social_feed.services import posts as post_service

router = APIRouter(prefix="/posts", tags=["posts"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PostOut:
    """Create a post; hashtags are lower-cased and created on first use."""
    return PostOut(**post_service.create_post(db, current_user.id, payload.content, payload.hashtags))


@router.get("", response_model=PostPage)
def list_posts(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> PostPage:
    """List all posts, newest first."""
    page = post_service.list_posts(db, limit=limit, offset=offset)
    return PostPage(data=page.items, meta=page.meta)


@router.get("/hashtag/{tag}", response_model=PostPage)
def list_posts_by_hashtag(
    tag: str = Path(..., pattern=TAG_PATTERN, description="Hashtag name, case-insensitive"),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> PostPage:
    """List posts carrying a hashtag. An unknown hashtag gives an empty page."""
    page = post_service.posts_by_hashtag(db, tag, limit=limit, offset=offset)
    return PostPage(data=page.items, meta=page.meta)


@router.get("/{post_id}", response_model=PostOut)
def get_post(post_id: int = Path(..., ge=1), db: Session = Depends(get_db)) -> PostOut:
    return PostOut(**post_service.get_post(db, post_id))


@router.put("/{post_id}", response_model=PostOut)
def update_post(
    payload: PostUpdateRequest,
    post_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PostOut:
    """Replace a post's content. Only its author may do this."""
    return PostOut(**post_service.update_post(db, current_user.id, post_id, payload.content))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    post_service.delete_post(db, current_user.id, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
