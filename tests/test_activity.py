# tests/test_activity.py
"""Tests for activity references, enrichment and the activity listing."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from social_feed.errors import DuplicateError, NotFoundError, ValidationFailedError
from social_feed.models import ActivityLog, ActivityRef, ActivityType, FollowRef, LikeRef, PostRef, UserRef
from social_feed.services.activity import enrich_activity_page, list_user_activity
from social_feed.services.follows import create_follow, delete_follow
from social_feed.services.likes import create_like
from social_feed.services.posts import create_post, delete_post


def _row(row_id, activity_type, entity_id, created_at=datetime(2024, 1, 1)):
    return ActivityLog(
        id=row_id, user_id=1, activity_type=activity_type, entity_id=entity_id, created_at=created_at
    )


class TestActivityRef:

    def test_from_row_picks_subclass_by_type(self):
        assert ActivityRef.from_row(ActivityType.POST_CREATE, 4) == PostRef(4)
        assert ActivityRef.from_row("POST_LIKE", 5) == LikeRef(5)
        assert ActivityRef.from_row("USER_FOLLOW", 6) == FollowRef(6)
        assert ActivityRef.from_row("USER_UNFOLLOW", 7) == UserRef(7)

    def test_refs_of_different_kinds_are_not_equal(self):
        assert PostRef(1) != LikeRef(1)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            ActivityRef.from_row("POST_SHARE", 1)

    def test_record_and_ref_round_trip_through_log_row(self):
        row = ActivityLog.record(3, FollowRef(12))

        assert row.user_id == 3
        assert row.activity_type == ActivityType.USER_FOLLOW
        assert row.entity_id == 12
        assert row.ref == FollowRef(12)


class TestEnrichmentWithMockedSession:
    """Enrichment against a session where every lookup misses."""

    def setup_method(self):
        self.mock_db = MagicMock()
        self.mock_db.query.return_value.filter.return_value.first.return_value = None
        self.mock_db.query.return_value.options.return_value.filter.return_value.first.return_value = None

    def test_missing_targets_give_empty_detail(self):
        rows = [
            _row(1, ActivityType.POST_CREATE, 10),
            _row(2, ActivityType.POST_LIKE, 11),
            _row(3, ActivityType.USER_FOLLOW, 12),
            _row(4, ActivityType.USER_UNFOLLOW, 13),
        ]

        enriched = enrich_activity_page(self.mock_db, rows)

        assert [e.detail for e in enriched] == [{}, {}, {}, {}]

    def test_order_and_length_preserved(self):
        rows = [
            _row(9, ActivityType.USER_UNFOLLOW, 1),
            _row(3, ActivityType.POST_CREATE, 2),
            _row(5, ActivityType.POST_LIKE, 3),
        ]

        enriched = enrich_activity_page(self.mock_db, rows)

        assert [e.id for e in enriched] == [9, 3, 5]
        assert [e.type for e in enriched] == [
            ActivityType.USER_UNFOLLOW, ActivityType.POST_CREATE, ActivityType.POST_LIKE
        ]
        assert all(e.created_at == datetime(2024, 1, 1) for e in enriched)

    def test_empty_page(self):
        assert enrich_activity_page(self.mock_db, []) == []
        self.mock_db.query.assert_not_called()


class TestEnrichmentWithDatabase:

    def test_each_type_resolves_to_its_entity(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        post = create_post(db, a.id, "first post", ["intro"])
        like = create_like(db, a.id, post["id"])
        follow = create_follow(db, a.id, b.id)

        page = list_user_activity(db, a.id, limit=10, offset=0)

        by_type = {e.type: e.detail for e in page.items}
        assert set(by_type) == {ActivityType.POST_CREATE, ActivityType.POST_LIKE, ActivityType.USER_FOLLOW}
        assert by_type[ActivityType.POST_CREATE]["post"]["id"] == post["id"]
        assert by_type[ActivityType.POST_CREATE]["post"]["content"] == "first post"
        assert by_type[ActivityType.POST_LIKE]["like"]["id"] == like["id"]
        assert by_type[ActivityType.POST_LIKE]["like"]["post"]["id"] == post["id"]
        assert by_type[ActivityType.USER_FOLLOW]["follow"]["id"] == follow["id"]
        assert by_type[ActivityType.USER_FOLLOW]["follow"]["followed"]["id"] == b.id

    def test_newest_first(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        post = create_post(db, a.id, "hello")
        create_follow(db, a.id, b.id)

        page = list_user_activity(db, a.id, limit=10, offset=0)

        assert [e.type for e in page.items] == [ActivityType.USER_FOLLOW, ActivityType.POST_CREATE]
        assert page.items[1].detail["post"]["id"] == post["id"]

    def test_unfollow_resolves_to_unfollowed_user(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        follow = create_follow(db, a.id, b.id)
        delete_follow(db, a.id, follow["id"])

        page = list_user_activity(db, a.id, limit=10, offset=0)

        assert page.total == 2
        unfollow, original_follow = page.items
        assert unfollow.type == ActivityType.USER_UNFOLLOW
        assert unfollow.detail["followed"]["id"] == b.id
        assert unfollow.detail["followed"]["email"] == "bob@example.com"
        assert "password" not in unfollow.detail["followed"]
        # the edge is gone, so the follow row no longer resolves
        assert original_follow.type == ActivityType.USER_FOLLOW
        assert original_follow.detail == {}

    def test_deleted_post_gives_empty_detail(self, db, make_user):
        a = make_user("ada")
        post = create_post(db, a.id, "short-lived")
        create_like(db, a.id, post["id"])
        delete_post(db, a.id, post["id"])

        page = list_user_activity(db, a.id, limit=10, offset=0)

        assert page.total == 2
        assert [e.detail for e in page.items] == [{}, {}]

    def test_rejected_write_leaves_no_log_row(self, db, make_user):
        a = make_user("ada")
        post = create_post(db, a.id, "once")
        create_like(db, a.id, post["id"])

        with pytest.raises(DuplicateError):
            create_like(db, a.id, post["id"])

        assert db.query(ActivityLog).filter(ActivityLog.activity_type == ActivityType.POST_LIKE).count() == 1


class TestListUserActivity:

    def test_unknown_user(self, db):
        with pytest.raises(NotFoundError):
            list_user_activity(db, 999, limit=10, offset=0)

    def test_inverted_date_range_rejected(self, db, make_user):
        a = make_user("ada")

        with pytest.raises(ValidationFailedError):
            list_user_activity(
                db, a.id, limit=10, offset=0,
                start_date=datetime(2024, 3, 1), end_date=datetime(2024, 2, 1),
            )

    def test_inverted_date_range_checked_before_user_lookup(self, db):
        with pytest.raises(ValidationFailedError):
            list_user_activity(
                db, 999, limit=10, offset=0,
                start_date=datetime(2024, 3, 1), end_date=datetime(2024, 2, 1),
            )

    def test_user_without_activity_gets_empty_page(self, db, make_user):
        a = make_user("ada")

        page = list_user_activity(db, a.id, limit=10, offset=0)

        assert page.items == []
        assert page.total == 0

    def test_only_own_rows_listed(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        create_post(db, a.id, "mine")
        create_post(db, b.id, "theirs")
        create_follow(db, b.id, a.id)

        page = list_user_activity(db, a.id, limit=10, offset=0)

        assert page.total == 1
        assert page.items[0].detail["post"]["content"] == "mine"

    def test_type_filter(self, db, make_user):
        a = make_user("ada")
        b = make_user("bob")
        post = create_post(db, a.id, "hello")
        create_like(db, a.id, post["id"])
        create_follow(db, a.id, b.id)

        page = list_user_activity(db, a.id, limit=10, offset=0, activity_type=ActivityType.POST_LIKE)

        assert page.total == 1
        assert page.items[0].type == ActivityType.POST_LIKE

    def test_date_range_is_inclusive(self, db, make_user):
        a = make_user("ada")
        for content in ("january", "february", "march"):
            create_post(db, a.id, content)
        rows = db.query(ActivityLog).order_by(ActivityLog.id).all()
        for row, month in zip(rows, (1, 2, 3)):
            row.created_at = datetime(2024, month, 1)
        db.commit()

        page = list_user_activity(
            db, a.id, limit=10, offset=0,
            start_date=datetime(2024, 2, 1), end_date=datetime(2024, 3, 1),
        )

        assert page.total == 2
        assert [e.detail["post"]["content"] for e in page.items] == ["march", "february"]

    def test_timezone_aware_bounds_compare_as_utc(self, db, make_user):
        a = make_user("ada")
        create_post(db, a.id, "tagged")
        row = db.query(ActivityLog).one()
        row.created_at = datetime(2024, 5, 1, 12, 0)
        db.commit()

        page = list_user_activity(
            db, a.id, limit=10, offset=0,
            start_date=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )

        assert page.total == 1

    def test_pagination_total_counts_all_rows(self, db, make_user):
        a = make_user("ada")
        for i in range(4):
            create_post(db, a.id, f"post {i}")

        page = list_user_activity(db, a.id, limit=3, offset=3)

        assert page.total == 4
        assert len(page.items) == 1
        assert page.meta == {"total": 4, "limit": 3, "offset": 3}
