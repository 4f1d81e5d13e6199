"""Test deterministic seeding and the seeded data's activity trail."""

import random

from faker import Faker
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from social_feed.db import init_db
from social_feed.models import ActivityLog, ActivityType, Follow, Like, Post
from social_feed.services import seeder
from social_feed.services.seeder import seed_random_generators


class TestDeterministicSeeding:
    """Test that seeding produces deterministic results."""

    def test_hashtag_pool_deterministic(self):
        """The Faker-extended hashtag pool is the same after each reseed."""
        seed_random_generators()
        pool1 = seeder.make_hashtag_pool(30)

        seed_random_generators()
        pool2 = seeder.make_hashtag_pool(30)

        assert pool1 == pool2

    def test_seed_random_generators_function(self):
        """Test that seed_random_generators resets both random and the module Faker."""
        seed_random_generators()
        random_values1 = [random.randint(1, 100) for _ in range(5)]
        names1 = [seeder.fake.first_name() for _ in range(3)]

        seed_random_generators()
        random_values2 = [random.randint(1, 100) for _ in range(5)]
        names2 = [seeder.fake.first_name() for _ in range(3)]

        assert random_values1 == random_values2
        assert names1 == names2

    def test_hashtag_pool(self):
        seed_random_generators()

        assert seeder.make_hashtag_pool(5) == ["ai", "ml", "datascience", "python", "fastapi"]
        pool = seeder.make_hashtag_pool(25)
        assert len(pool) == 25

    def test_faker_instances_agree(self):
        fake1 = Faker()
        fake1.seed_instance(seeder.SEED)
        fake2 = Faker()
        fake2.seed_instance(seeder.SEED)

        assert [fake1.email() for _ in range(3)] == [fake2.email() for _ in range(3)]


class TestSeededData:
    """Seed a small database through the services."""

    def test_every_write_is_logged(self, db):
        seed_random_generators()
        users = seeder.make_users(db, 6)
        tags = seeder.make_hashtag_pool(8)
        post_ids = seeder.make_posts(db, users, tags, 15)
        n_follows = seeder.make_follows(db, users, max_per_user=3)
        n_likes = seeder.make_likes(db, users, post_ids, max_per_user=4)

        assert db.query(Post).count() == 15
        assert db.query(Follow).count() == n_follows
        assert db.query(Like).count() == n_likes
        assert db.query(ActivityLog).count() == 15 + n_follows + n_likes
        assert db.query(ActivityLog).filter(
            ActivityLog.activity_type == ActivityType.POST_CREATE
        ).count() == 15

    def test_no_self_follows(self, db):
        seed_random_generators()
        users = seeder.make_users(db, 5)
        seeder.make_follows(db, users, max_per_user=10)

        assert db.query(Follow).filter(Follow.follower_id == Follow.followed_id).count() == 0

    def test_same_seed_same_data(self):
        def build():
            engine = create_engine("sqlite://")
            init_db(bind=engine)
            session = sessionmaker(bind=engine)()
            try:
                seed_random_generators()
                users = seeder.make_users(session, 4)
                seeder.make_posts(session, users, seeder.make_hashtag_pool(6), 8)
                authors = {u.id: u.email for u in users}
                return [(authors[p.user_id], p.content) for p in session.query(Post).order_by(Post.id)]
            finally:
                session.close()
                engine.dispose()

        assert build() == build()
