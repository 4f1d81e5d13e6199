"""User accounts: registration, login and self-service profile changes."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_feed.errors import AuthenticationError, DuplicateError, NotFoundError, PermissionDeniedError
from social_feed.models import User
from social_feed.security import create_access_token, hash_password, verify_password
from social_feed.services.serializers import user_summary

logger = logging.getLogger(__name__)


def _email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(User).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def register_user(db: Session, first_name: str, last_name: str, email: str, password: str) -> Dict[str, Any]:
    email = email.lower()
    if _email_taken(db, email):
        raise DuplicateError("User with this email already exists")

    user = User(first_name=first_name, last_name=last_name, email=email, password=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError("User with this email already exists")
    db.refresh(user)
    logger.info("User %s registered", user.id)
    return user_summary(user)


def login(db: Session, email: str, password: str) -> Dict[str, Any]:
    """Check credentials and issue an access token; unknown email and bad password look the same."""
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not verify_password(password, user.password):
        raise AuthenticationError("Invalid email or password")

    logger.info("User %s logged in", user.id)
    return {"token": create_access_token(user.id, user.email), "user": user_summary(user)}


def list_users(db: Session) -> List[Dict[str, Any]]:
    return [user_summary(u) for u in db.query(User).order_by(User.id).all()]


def get_user(db: Session, user_id: int) -> Dict[str, Any]:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user_summary(user)


def _own_account(db: Session, acting_user_id: int, user_id: int, action: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    if user.id != acting_user_id:
        raise PermissionDeniedError(f"You can only {action} your own account")
    return user


def update_user(db: Session, acting_user_id: int, user_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
    """Apply the non-null fields of changes (first_name, last_name, email, password)."""
    user = _own_account(db, acting_user_id, user_id, "update")

    if changes.get("email"):
        email = changes["email"].lower()
        if _email_taken(db, email, exclude_id=user.id):
            raise DuplicateError("User with this email already exists")
        user.email = email
    if changes.get("first_name"):
        user.first_name = changes["first_name"]
    if changes.get("last_name"):
        user.last_name = changes["last_name"]
    if changes.get("password"):
        user.password = hash_password(changes["password"])

    db.commit()
    db.refresh(user)
    logger.info("User %s updated", user_id)
    return user_summary(user)


def delete_user(db: Session, acting_user_id: int, user_id: int) -> None:
    """Remove the account with its posts, likes, follow edges and activity rows."""
    user = _own_account(db, acting_user_id, user_id, "delete")
    db.delete(user)
    db.commit()
    logger.info("User %s deleted", user_id)
