"""Plain-dict views of ORM rows, shaped for the response models in social_feed.schemas."""

from typing import Any, Dict, List, Optional

from social_feed.models import Follow, Hashtag, Like, Post, User


def user_summary(user: User) -> Dict[str, Any]:
    # credential hash never leaves the service layer
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def post_fields(post: Post) -> Dict[str, Any]:
    return {
        "id": post.id,
        "content": post.content,
        "user_id": post.user_id,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def hashtag_names(post: Post) -> List[str]:
    return [link.hashtag.name for link in post.hashtags]


def post_record(post: Post, like_count: int) -> Dict[str, Any]:
    """Post with author summary, hashtag names and like count."""
    record = post_fields(post)
    record.update(
        user=user_summary(post.user),
        hashtags=hashtag_names(post),
        like_count=like_count,
    )
    return record


def like_record(like: Like, with_user: bool = False, with_post: bool = False) -> Dict[str, Any]:
    record = {
        "id": like.id,
        "user_id": like.user_id,
        "post_id": like.post_id,
        "created_at": like.created_at,
    }
    if with_user and like.user is not None:
        record["user"] = user_summary(like.user)
    if with_post and like.post is not None:
        record["post"] = post_fields(like.post)
    return record


def follow_record(follow: Follow, with_follower: bool = False, with_followed: bool = False) -> Dict[str, Any]:
    record = {
        "id": follow.id,
        "follower_id": follow.follower_id,
        "followed_id": follow.followed_id,
        "created_at": follow.created_at,
    }
    if with_follower and follow.follower is not None:
        record["follower"] = user_summary(follow.follower)
    if with_followed and follow.followed is not None:
        record["followed"] = user_summary(follow.followed)
    return record


def follow_entry(follow: Follow, user: Optional[User]) -> Dict[str, Any]:
    """Follower/following list entry: the other side of the edge plus when it was made."""
    return {"id": follow.id, "user": user_summary(user), "followed_at": follow.created_at}


def hashtag_record(hashtag: Hashtag) -> Dict[str, Any]:
    return {"id": hashtag.id, "name": hashtag.name, "created_at": hashtag.created_at}
