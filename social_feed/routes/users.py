"""
FastAPI routes for registration, login and user accounts.
"""
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from social_feed.db import get_db
from social_feed.models import User
from social_feed.schemas import LoginRequest, RegisterRequest, TokenResponse, UserSummary, UserUpdateRequest
from social_feed.security import get_current_user
from social_feed.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> UserSummary:
    return UserSummary(
        **user_service.register_user(
            db, payload.first_name, payload.last_name, payload.email, payload.password
        )
    )


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    return TokenResponse(**user_service.login(db, payload.email, payload.password))


@router.get("", response_model=List[UserSummary], dependencies=[Depends(get_current_user)])
def list_users(db: Session = Depends(get_db)) -> List[UserSummary]:
    return [UserSummary(**u) for u in user_service.list_users(db)]


@router.get("/{user_id}", response_model=UserSummary, dependencies=[Depends(get_current_user)])
def get_user(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)) -> UserSummary:
    return UserSummary(**user_service.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserSummary)
def update_user(
    payload: UserUpdateRequest,
    user_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserSummary:
    """Update your own profile; omitted fields are left alone."""
    changes = payload.model_dump(exclude_none=True)
    return UserSummary(**user_service.update_user(db, current_user.id, user_id, changes))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    """Delete your own account along with its posts, likes and follows."""
    user_service.delete_user(db, current_user.id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
