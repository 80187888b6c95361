"""Application tests for achievement management and unlocking."""

import pytest
from library.achievement.management import (
    CreateAchievement,
    DeleteAchievement,
    RestoreAchievement,
    UnlockAchievement,
    UpdateAchievement,
    achievements_of_game,
    achievements_of_user,
)
from library.ownership.grants import GrantGame
from protean import current_domain
from protean.exceptions import ValidationError


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _create(name="First Ingot", game_id="game-001", points=10):
    return _process(CreateAchievement(game_id=game_id, name=name, points=points))


class TestAchievementManagement:
    def test_names_are_unique_per_game(self):
        _create()
        with pytest.raises(ValidationError):
            _create()

    def test_same_name_in_another_game(self):
        _create()
        _create(game_id="game-002")
        assert len(achievements_of_game("game-002")) == 1

    def test_deleted_achievements_are_hidden(self):
        achievement_id = _create()
        _process(DeleteAchievement(achievement_id=achievement_id))

        assert achievements_of_game("game-001") == []
        assert len(achievements_of_game("game-001", include_deleted=True)) == 1

        _process(RestoreAchievement(achievement_id=achievement_id))
        assert len(achievements_of_game("game-001")) == 1

    def test_update(self):
        achievement_id = _create()
        _process(UpdateAchievement(achievement_id=achievement_id, points=25))
        assert achievements_of_game("game-001")[0].points == 25


class TestUnlock:
    def test_owner_unlocks_achievement(self):
        _process(GrantGame(user_id="user-001", game_id="game-001"))
        achievement_id = _create()

        _process(UnlockAchievement(user_id="user-001", achievement_id=achievement_id))

        unlocked = achievements_of_user("user-001")
        assert [str(u.achievement_id) for u in unlocked] == [achievement_id]

    def test_non_owner_cannot_unlock(self):
        achievement_id = _create()
        with pytest.raises(ValidationError) as exc:
            _process(UnlockAchievement(user_id="user-001", achievement_id=achievement_id))
        assert "user_id" in exc.value.messages

    def test_unlock_only_once(self):
        _process(GrantGame(user_id="user-001", game_id="game-001"))
        achievement_id = _create()
        _process(UnlockAchievement(user_id="user-001", achievement_id=achievement_id))

        with pytest.raises(ValidationError):
            _process(UnlockAchievement(user_id="user-001", achievement_id=achievement_id))

    def test_deleted_achievement_cannot_be_unlocked(self):
        _process(GrantGame(user_id="user-001", game_id="game-001"))
        achievement_id = _create()
        _process(DeleteAchievement(achievement_id=achievement_id))

        with pytest.raises(ValidationError):
            _process(UnlockAchievement(user_id="user-001", achievement_id=achievement_id))
