# tests/test_feed.py
"""Tests for feed source resolution and feed page assembly."""

from unittest.mock import MagicMock

from social_feed.services.feed import get_feed, resolve_feed_sources
from social_feed.services.follows import create_follow
from social_feed.services.likes import create_like
from social_feed.services.posts import create_post


class TestResolveFeedSources:
    """Follow-graph resolution without a database."""

    def setup_method(self):
        self.mock_db = MagicMock()

    def test_user_without_follows_gets_only_self(self):
        self.mock_db.query().filter().all.return_value = []

        assert resolve_feed_sources(self.mock_db, 7) == {7}

    def test_followed_users_are_added_to_self(self):
        self.mock_db.query().filter().all.return_value = [(2,), (3,)]

        assert resolve_feed_sources(self.mock_db, 1) == {1, 2, 3}

    def test_no_duplicates(self):
        self.mock_db.query().filter().all.return_value = [(2,), (2,)]

        assert resolve_feed_sources(self.mock_db, 1) == {1, 2}


class TestResolveFeedSourcesWithDatabase:

    def test_self_always_included(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        c = make_user("cy")
        create_follow(db, a.id, b.id)

        assert resolve_feed_sources(db, a.id) == {a.id, b.id}
        assert resolve_feed_sources(db, c.id) == {c.id}
        # following is directional
        assert resolve_feed_sources(db, b.id) == {b.id}


class TestGetFeed:

    def test_followed_post_appears_with_hashtags_and_zero_likes(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        create_follow(db, a.id, b.id)
        post = create_post(db, b.id, "hello from bob", ["x"])

        page = get_feed(db, a.id, limit=10, offset=0)

        assert page.total == 1
        assert len(page.items) == 1
        item = page.items[0]
        assert item["id"] == post["id"]
        assert item["hashtags"] == ["x"]
        assert item["like_count"] == 0
        assert item["user"]["id"] == b.id
        assert "password" not in item["user"]

    def test_own_posts_without_follows(self, db, make_user):
        a = make_user("ada")
        create_post(db, a.id, "just me")

        page = get_feed(db, a.id, limit=10, offset=0)

        assert [p["content"] for p in page.items] == ["just me"]

    def test_empty_feed_is_not_an_error(self, db, make_user):
        a = make_user("ada")

        page = get_feed(db, a.id, limit=10, offset=0)

        assert page.items == []
        assert page.meta == {"total": 0, "limit": 10, "offset": 0}

    def test_unfollowed_authors_excluded(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        stranger = make_user("eve")
        create_follow(db, a.id, b.id)
        create_post(db, b.id, "visible")
        create_post(db, stranger.id, "invisible")

        page = get_feed(db, a.id, limit=10, offset=0)

        assert [p["content"] for p in page.items] == ["visible"]

    def test_newest_first(self, db, make_user):
        a = make_user("ada")
        first = create_post(db, a.id, "first")
        second = create_post(db, a.id, "second")
        third = create_post(db, a.id, "third")

        page = get_feed(db, a.id, limit=10, offset=0)

        assert [p["id"] for p in page.items] == [third["id"], second["id"], first["id"]]

    def test_pagination_respects_limit_and_reports_full_total(self, db, make_user):
        a = make_user("ada")
        ids = [create_post(db, a.id, f"post {i}")["id"] for i in range(5)]

        first_page = get_feed(db, a.id, limit=2, offset=0)
        last_page = get_feed(db, a.id, limit=2, offset=4)
        past_end = get_feed(db, a.id, limit=2, offset=10)

        assert len(first_page.items) == 2
        assert first_page.total == 5
        assert [p["id"] for p in first_page.items] == ids[::-1][:2]
        assert len(last_page.items) == 1
        assert last_page.total == 5
        assert past_end.items == []
        assert past_end.total == 5

    def test_like_count_and_hashtag_order(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        post = create_post(db, a.id, "tagged", ["Zeta", "alpha", "zeta", "Mid"])
        create_like(db, a.id, post["id"])
        create_like(db, b.id, post["id"])

        item = get_feed(db, a.id, limit=10, offset=0).items[0]

        # lower-cased, de-duplicated, insertion order kept
        assert item["hashtags"] == ["zeta", "alpha", "mid"]
        assert item["like_count"] == 2
