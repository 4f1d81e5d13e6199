"""
Request and response models.

Python code works in snake_case; the JSON surface is camelCase
(``likeCount``, ``followedId``) through the alias generator on CamelModel.
"""
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from social_feed.models import ActivityType

TAG_PATTERN = r"^[a-zA-Z0-9_]+$"

HashtagName = Annotated[str, StringConstraints(pattern=TAG_PATTERN, min_length=1, max_length=50)]

# bcrypt only reads the first 72 bytes and rejects longer input
PASSWORD_MAX_BYTES = 72


def _password_fits_bcrypt(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes in UTF-8")
    return value


Password = Annotated[str, AfterValidator(_password_fits_bcrypt)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageMeta(CamelModel):
    total: int = Field(..., description="Matching rows before paging")
    limit: int
    offset: int


# Users

class UserSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime


class RegisterRequest(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: Password = Field(..., min_length=6, max_length=72)


class LoginRequest(CamelModel):
    email: EmailStr
    password: Password = Field(..., min_length=1, max_length=72)


class TokenResponse(CamelModel):
    token: str
    user: UserSummary


class UserUpdateRequest(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[Password] = Field(None, min_length=6, max_length=72)


# Posts

class PostCreateRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)
    hashtags: Optional[List[HashtagName]] = None


class PostUpdateRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)


class PostBase(CamelModel):
    id: int
    content: str
    user_id: int
    created_at: datetime
    updated_at: datetime


class PostOut(PostBase):
    user: UserSummary
    hashtags: List[str] = Field(..., description="Hashtag names in insertion order")
    like_count: int


class PostPage(CamelModel):
    data: List[PostOut]
    meta: PageMeta


# Likes

class LikeCreateRequest(CamelModel):
    post_id: int = Field(..., ge=1)


class LikeOut(CamelModel):
    id: int
    user_id: int
    post_id: int
    created_at: datetime


class LikeDetail(LikeOut):
    user: Optional[UserSummary] = None
    post: Optional[PostBase] = None


class LikePage(CamelModel):
    data: List[LikeDetail]
    meta: PageMeta


# Follows

class FollowCreateRequest(CamelModel):
    followed_id: int = Field(..., ge=1)


class FollowOut(CamelModel):
    id: int
    follower_id: int
    followed_id: int
    created_at: datetime


class FollowDetail(FollowOut):
    follower: Optional[UserSummary] = None
    followed: Optional[UserSummary] = None


class FollowEntry(CamelModel):
    id: int
    user: UserSummary
    followed_at: datetime


class FollowEntryPage(CamelModel):
    data: List[FollowEntry]
    meta: PageMeta


# Hashtags

class HashtagCreateRequest(CamelModel):
    name: HashtagName


class HashtagOut(CamelModel):
    id: int
    name: str
    created_at: datetime


# Activity

class ActivityDetail(CamelModel):
    """Exactly one key is set, chosen by the activity type; empty when the target is gone."""
    post: Optional[PostBase] = None
    like: Optional[LikeDetail] = None
    follow: Optional[FollowDetail] = None
    followed: Optional[UserSummary] = None


class ActivityOut(CamelModel):
    id: int
    type: ActivityType
    created_at: datetime
    detail: ActivityDetail


class ActivityPage(CamelModel):
    data: List[ActivityOut]
    meta: PageMeta
