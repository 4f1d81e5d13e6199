"""
FastAPI routes for following and unfollowing users.
"""
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from social_feed.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from social_feed.db import get_db
from social_feed.models import User
from social_feed.schemas import FollowCreateRequest, FollowDetail, FollowEntryPage, FollowOut
from social_feed.security import get_current_user
from social_feed.services import follows as follow_service

router = APIRouter(prefix="/follows", tags=["follows"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=FollowOut, status_code=status.HTTP_201_CREATED)
def create_follow(
    payload: FollowCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FollowOut:
    """Follow another user."""
    return FollowOut(**follow_service.create_follow(db, current_user.id, payload.followed_id))


@router.get("", response_model=List[FollowDetail])
def list_follows(db: Session = Depends(get_db)) -> List[FollowDetail]:
    return [FollowDetail(**follow) for follow in follow_service.list_follows(db)]


@router.get("/users/{user_id}/followers", response_model=FollowEntryPage)
def list_followers(
    user_id: int = Path(..., ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> FollowEntryPage:
    """Users following user_id."""
    page = follow_service.get_followers(db, user_id, limit=limit, offset=offset)
    return FollowEntryPage(data=page.items, meta=page.meta)


@router.get("/users/{user_id}/following", response_model=FollowEntryPage)
def list_following(
    user_id: int = Path(..., ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> FollowEntryPage:
    """Users that user_id follows."""
    page = follow_service.get_following(db, user_id, limit=limit, offset=offset)
    return FollowEntryPage(data=page.items, meta=page.meta)


@router.get("/{follow_id}", response_model=FollowDetail)
def get_follow(follow_id: int = Path(..., ge=1), db: Session = Depends(get_db)) -> FollowDetail:
    return FollowDetail(**follow_service.get_follow(db, follow_id))


@router.delete("/{follow_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_follow(
    follow_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    """Unfollow. Only the follower may remove the edge."""
    follow_service.delete_follow(db, current_user.id, follow_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
