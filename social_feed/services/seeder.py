from __future__ import annotations
import random
from typing import Sequence
from faker import Faker
from sqlalchemy.orm import Session

from social_feed.models import User
from social_feed.security import hash_password
from social_feed.services.follows import create_follow
from social_feed.services.likes import create_like
from social_feed.services.posts import create_post

SEED = 1337
DEFAULT_PASSWORD = "password123"

fake = Faker()

def seed_random_generators(seed: int = SEED) -> None:
    random.seed(seed)
    Faker.seed(seed)
    fake.seed_instance(seed)
    fake.unique.clear()

def make_users(db: Session, n_users: int, password: str = DEFAULT_PASSWORD) -> list[User]:
    # every seeded account shares one hash
    hashed = hash_password(password)
    users = [
        User(
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            email=fake.unique.email().lower(),
            password=hashed,
        )
        for _ in range(n_users)
    ]
    db.add_all(users); db.commit()
    return users

def make_hashtag_pool(n_tags: int) -> list[str]:
    base = [
        "ai","ml","datascience","python","fastapi","django","cloud","devops","startup","news",
        "music","sports","gaming","travel","food","fitness","health","finance","crypto","stocks"
    ]
    while len(base) < n_tags:
        base.append(fake.unique.word().lower())
    return base[:n_tags]

def make_posts(db: Session, users: Sequence[User], tags: Sequence[str], n_posts: int) -> list[int]:
    """Create posts through the post service so each one gets its POST_CREATE row."""
    weights = [5 if t in ("ai","python","news","sports","travel") else 1 for t in tags]
    post_ids: list[int] = []
    for _ in range(n_posts):
        u = random.choice(users)
        chosen = random.choices(tags, weights=weights, k=random.randint(0, 4)) if tags else []
        record = create_post(db, u.id, fake.sentence(nb_words=random.randint(8, 20)), chosen)
        post_ids.append(record["id"])
    return post_ids

def make_follows(db: Session, users: Sequence[User], max_per_user: int = 10) -> int:
    created = 0
    for u in users:
        others = [o for o in users if o.id != u.id]
        for target in random.sample(others, k=min(len(others), random.randint(0, max_per_user))):
            create_follow(db, u.id, target.id)
            created += 1
    return created

def make_likes(db: Session, users: Sequence[User], post_ids: Sequence[int], max_per_user: int = 20) -> int:
    created = 0
    for u in users:
        for post_id in random.sample(list(post_ids), k=min(len(post_ids), random.randint(0, max_per_user))):
            create_like(db, u.id, post_id)
            created += 1
    return created
