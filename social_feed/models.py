from dataclasses import dataclass
from datetime import datetime
from enum import Enum as PyEnum
from typing import ClassVar, Dict, Type

from sqlalchemy import (
    CheckConstraint, Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    posts = relationship("Post", back_populates="user", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")
    following = relationship(
        "Follow", foreign_keys="Follow.follower_id", back_populates="follower", cascade="all, delete-orphan"
    )
    followers = relationship(
        "Follow", foreign_keys="Follow.followed_id", back_populates="followed", cascade="all, delete-orphan"
    )
    activities = relationship("ActivityLog", back_populates="user", cascade="all, delete-orphan")


class Post(Base):
    __tablename__ = "posts"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="posts")
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan")
    hashtags = relationship(
        "PostHashtag", back_populates="post", cascade="all, delete-orphan", order_by="PostHashtag.position"
    )

Index("idx_posts_created", Post.created_at.desc())
Index("idx_posts_user_created", Post.user_id, Post.created_at)


class Hashtag(Base):
    __tablename__ = "hashtags"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    posts = relationship("PostHashtag", back_populates="hashtag", cascade="all, delete-orphan")


class PostHashtag(Base):
    __tablename__ = "post_hashtags"
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    hashtag_id = Column(Integer, ForeignKey("hashtags.id", ondelete="CASCADE"), primary_key=True)
    # insertion order of the tag within its post
    position = Column(Integer, nullable=False, default=0)

    post = relationship("Post", back_populates="hashtags")
    hashtag = relationship("Hashtag", back_populates="posts")

Index("idx_posthashtags_tag_post", PostHashtag.hashtag_id, PostHashtag.post_id)


class Follow(Base):
    __tablename__ = "follows"
    id = Column(Integer, primary_key=True)
    follower_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    followed_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    follower = relationship("User", foreign_keys=[follower_id], back_populates="following")
    followed = relationship("User", foreign_keys=[followed_id], back_populates="followers")

    __table_args__ = (
        UniqueConstraint("follower_id", "followed_id", name="uq_follows_pair"),
        CheckConstraint("follower_id <> followed_id", name="ck_follows_no_self"),
    )


class Like(Base):
    __tablename__ = "likes"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="likes")
    post = relationship("Post", back_populates="likes")

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_likes_pair"),
    )


class ActivityType(str, PyEnum):
    POST_CREATE = "POST_CREATE"
    POST_LIKE = "POST_LIKE"
    USER_FOLLOW = "USER_FOLLOW"
    USER_UNFOLLOW = "USER_UNFOLLOW"


@dataclass(frozen=True)
class ActivityRef:
    """
    Typed reference to the entity an activity row describes.

    Stored flat as (activity_type, entity_id); each subclass fixes the
    activity type, so the meaning of entity_id travels with the value.
    """
    entity_id: int
    activity_type: ClassVar[ActivityType]

    @staticmethod
    def from_row(activity_type, entity_id: int) -> "ActivityRef":
        return _REF_TYPES[ActivityType(activity_type)](entity_id)


@dataclass(frozen=True)
class PostRef(ActivityRef):
    activity_type = ActivityType.POST_CREATE


@dataclass(frozen=True)
class LikeRef(ActivityRef):
    activity_type = ActivityType.POST_LIKE


@dataclass(frozen=True)
class FollowRef(ActivityRef):
    activity_type = ActivityType.USER_FOLLOW


@dataclass(frozen=True)
class UserRef(ActivityRef):
    """The user who was unfollowed; the follow edge itself is gone."""
    activity_type = ActivityType.USER_UNFOLLOW


_REF_TYPES: Dict[ActivityType, Type[ActivityRef]] = {
    ref_type.activity_type: ref_type for ref_type in (PostRef, LikeRef, FollowRef, UserRef)
}


class ActivityLog(Base):
    __tablename__ = "activity_logs"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    activity_type = Column(Enum(ActivityType, name="activity_type"), nullable=False)
    # post, like, follow or user id depending on activity_type
    entity_id = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="activities")

    @classmethod
    def record(cls, user_id: int, ref: ActivityRef) -> "ActivityLog":
        return cls(user_id=user_id, activity_type=ref.activity_type, entity_id=ref.entity_id)

    @property
    def ref(self) -> ActivityRef:
        return ActivityRef.from_row(self.activity_type, self.entity_id)

Index("idx_activity_user_type_created", ActivityLog.user_id, ActivityLog.activity_type, ActivityLog.created_at)
