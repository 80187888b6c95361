"""Tests for the Review, Achievement and UserAchievement aggregates."""

import pytest
from library.achievement.achievement import Achievement, UserAchievement
from library.achievement.events import AchievementUnlocked
from library.review.events import ReviewApproved, ReviewEdited, ReviewSubmitted
from library.review.review import Review, ReviewStatus
from protean.exceptions import ValidationError


def _make_review(rating=4):
    return Review.submit(user_id="user-001", game_id="game-001", rating=rating, comment="Solid forging sim")


class TestReview:
    def test_new_review_awaits_moderation(self):
        review = _make_review()
        assert review.status == ReviewStatus.PENDING.value
        assert not review.is_approved
        assert any(isinstance(e, ReviewSubmitted) for e in review._events)

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError) as exc:
            _make_review(rating)
        assert "rating" in exc.value.messages

    def test_approve(self):
        review = _make_review()
        review.approve(notes="Looks fine")
        assert review.is_approved
        assert any(isinstance(e, ReviewApproved) for e in review._events)

    def test_only_pending_reviews_are_moderated(self):
        review = _make_review()
        review.reject(reason="Spoilers")
        assert review.status == ReviewStatus.REJECTED.value
        with pytest.raises(ValidationError):
            review.approve()

    def test_edit_sends_review_back_to_moderation(self):
        review = _make_review()
        review.approve()

        review.edit(rating=2)

        assert review.status == ReviewStatus.PENDING.value
        assert review.rating == 2
        assert review.comment == "Solid forging sim"
        edited = next(e for e in review._events if isinstance(e, ReviewEdited))
        assert edited.previous_status == ReviewStatus.APPROVED.value

    def test_deleted_review_cannot_be_edited(self):
        review = _make_review()
        review.delete()
        with pytest.raises(ValidationError):
            review.edit(comment="Changed my mind")

    def test_restore(self):
        review = _make_review()
        review.delete()
        review.restore()
        assert review.is_deleted is False


class TestAchievement:
    def test_create_and_update(self):
        achievement = Achievement.create(game_id="game-001", name="First Ingot", points=10)
        achievement.update(description="Smelt your first ingot")
        assert achievement.points == 10
        assert achievement.description == "Smelt your first ingot"

    def test_negative_points_are_rejected(self):
        with pytest.raises(ValidationError):
            Achievement.create(game_id="game-001", name="Cheater", points=-5)

    def test_deleted_achievement_cannot_be_updated(self):
        achievement = Achievement.create(game_id="game-001", name="First Ingot")
        achievement.delete()
        with pytest.raises(ValidationError):
            achievement.update(points=5)
        achievement.restore()
        assert achievement.is_deleted is False

    def test_unlock_copies_game_and_points(self):
        achievement = Achievement.create(game_id="game-001", name="First Ingot", points=10)
        record = UserAchievement.unlock("user-001", achievement)
        assert str(record.game_id) == "game-001"
        unlocked = next(e for e in record._events if isinstance(e, AchievementUnlocked))
        assert unlocked.points == 10
