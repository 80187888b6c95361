"""Tests for the Follow aggregate."""

import pytest
from identity.follow.events import UserFollowed
from identity.follow.follow import Follow
from protean.exceptions import ValidationError


class TestFollow:
    def test_start_records_the_relation(self):
        follow = Follow.start("user-001", "user-002")
        assert str(follow.follower_id) == "user-001"
        assert str(follow.followed_id) == "user-002"
        assert follow.followed_at is not None

        event = next(e for e in follow._events if isinstance(e, UserFollowed))
        assert event.followed_id == "user-002"

    def test_users_cannot_follow_themselves(self):
        with pytest.raises(ValidationError) as exc:
            Follow.start("user-001", "user-001")
        assert "followed_id" in exc.value.messages
