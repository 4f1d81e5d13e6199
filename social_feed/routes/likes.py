"""
FastAPI routes for liking and unliking posts.
"""
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from social_feed.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from social_feed.db import get_db
from social_feed.models import User
from social_feed.schemas import LikeCreateRequest, LikeDetail, LikeOut, LikePage
from social_feed.security import get_current_user
from social_feed.services import likes as like_service

router = APIRouter(prefix="/likes", tags=["likes"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=LikeOut, status_code=status.HTTP_201_CREATED)
def create_like(
    payload: LikeCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> LikeOut:
    """Like a post. Each user may like a post once."""
    return LikeOut(**like_service.create_like(db, current_user.id, payload.post_id))


@router.get("", response_model=List[LikeDetail])
def list_likes(db: Session = Depends(get_db)) -> List[LikeDetail]:
    return [LikeDetail(**like) for like in like_service.list_likes(db)]


@router.get("/post/{post_id}", response_model=LikePage, response_model_exclude_none=True)
def list_likes_for_post(
    post_id: int = Path(..., ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> LikePage:
    """Likes on a post with the liking users, newest first."""
    page = like_service.likes_by_post(db, post_id, limit=limit, offset=offset)
    return LikePage(data=page.items, meta=page.meta)


@router.get("/{like_id}", response_model=LikeDetail)
def get_like(like_id: int = Path(..., ge=1), db: Session = Depends(get_db)) -> LikeDetail:
    return LikeDetail(**like_service.get_like(db, like_id))


@router.delete("/{like_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_like(
    like_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    like_service.delete_like(db, current_user.id, like_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
