"""
FastAPI routes for hashtags.
"""
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from social_feed.db import get_db
from social_feed.schemas import TAG_PATTERN, HashtagCreateRequest, HashtagOut
from social_feed.security import get_current_user
from social_feed.services import hashtags as hashtag_service

router = APIRouter(prefix="/hashtags", tags=["hashtags"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=HashtagOut, status_code=status.HTTP_201_CREATED)
def create_hashtag(payload: HashtagCreateRequest, db: Session = Depends(get_db)) -> HashtagOut:
    """
    Create a hashtag explicitly.

    Posts create their hashtags on first use, so this is rarely needed.
    Names are stored lower-cased.
    """
    return HashtagOut(**hashtag_service.create_hashtag(db, payload.name))


@router.get("", response_model=List[HashtagOut])
def list_hashtags(db: Session = Depends(get_db)) -> List[HashtagOut]:
    return [HashtagOut(**h) for h in hashtag_service.list_hashtags(db)]


@router.get("/name/{name}", response_model=HashtagOut)
def get_hashtag_by_name(
    name: str = Path(..., pattern=TAG_PATTERN, description="Hashtag name (without # symbol)"),
    db: Session = Depends(get_db),
) -> HashtagOut:
    return HashtagOut(**hashtag_service.get_hashtag_by_name(db, name))


@router.get("/{hashtag_id}", response_model=HashtagOut)
def get_hashtag(hashtag_id: int = Path(..., ge=1), db: Session = Depends(get_db)) -> HashtagOut:
    return HashtagOut(**hashtag_service.get_hashtag(db, hashtag_id))


@router.delete("/{hashtag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_hashtag(hashtag_id: int = Path(..., ge=1), db: Session = Depends(get_db)) -> Response:
    """Delete a hashtag and unlink it from every post."""
    hashtag_service.delete_hashtag(db, hashtag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
