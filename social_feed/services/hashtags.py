"""Hashtag lookup and lifecycle; names are stored lower-cased."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_feed.errors import DuplicateError, NotFoundError
from social_feed.models import Hashtag
from social_feed.services.serializers import hashtag_record

logger = logging.getLogger(__name__)


def normalize_tag(name: str) -> str:
    return name.strip().lstrip("#").lower()


def _find_hashtag(db: Session, name: str) -> Optional[Hashtag]:
    return db.query(Hashtag).filter(Hashtag.name == name).first()


def get_or_create_hashtag(db: Session, name: str) -> Hashtag:
    """
    Find a hashtag by normalized name, creating it on first use.

    A new hashtag is committed on its own, so call this before adding
    anything else to the session. When another request creates the same
    name first, that row is returned instead.
    """
    name = normalize_tag(name)
    hashtag = _find_hashtag(db, name)
    if hashtag is not None:
        return hashtag

    hashtag = Hashtag(name=name)
    db.add(hashtag)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = _find_hashtag(db, name)
        if existing is None:
            raise
        logger.info("Hashtag #%s was created concurrently, reusing ID %s", name, existing.id)
        return existing

    logger.info("Hashtag #%s created", name)
    return hashtag


def create_hashtag(db: Session, name: str) -> Dict[str, Any]:
    name = normalize_tag(name)
    if _find_hashtag(db, name):
        raise DuplicateError("Hashtag already exists")

    hashtag = Hashtag(name=name)
    db.add(hashtag)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError("Hashtag already exists")
    db.refresh(hashtag)
    logger.info("Hashtag #%s created with ID %s", name, hashtag.id)
    return hashtag_record(hashtag)


def list_hashtags(db: Session) -> List[Dict[str, Any]]:
    return [hashtag_record(h) for h in db.query(Hashtag).order_by(Hashtag.name).all()]


def get_hashtag(db: Session, hashtag_id: int) -> Dict[str, Any]:
    hashtag = db.query(Hashtag).filter(Hashtag.id == hashtag_id).first()
    if not hashtag:
        raise NotFoundError("Hashtag not found")
    return hashtag_record(hashtag)


def get_hashtag_by_name(db: Session, name: str) -> Dict[str, Any]:
    hashtag = _find_hashtag(db, normalize_tag(name))
    if not hashtag:
        raise NotFoundError("Hashtag not found")
    return hashtag_record(hashtag)


def delete_hashtag(db: Session, hashtag_id: int) -> None:
    hashtag = db.query(Hashtag).filter(Hashtag.id == hashtag_id).first()
    if not hashtag:
        raise NotFoundError("Hashtag not found")

    db.delete(hashtag)
    db.commit()
    logger.info("Hashtag %s deleted", hashtag_id)
