"""Achievement and UserAchievement aggregates.

An Achievement belongs to a game; a UserAchievement records that one user
unlocked it. They are separate aggregates so unlocking never contends with
editing the achievement itself.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from library.achievement.events import AchievementCreated, AchievementDeleted, AchievementUnlocked
from library.domain import library


@library.aggregate
class Achievement:
    game_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = Text()
    points = Integer(default=0, min_value=0)
    logo_url = String(max_length=500)
    is_deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, game_id, name, description=None, points=0, logo_url=None):
        now = datetime.now(UTC)
        achievement = cls(
            game_id=game_id,
            name=name,
            description=description,
            points=points,
            logo_url=logo_url,
            created_at=now,
            updated_at=now,
        )
        achievement.raise_(
            AchievementCreated(
                achievement_id=str(achievement.id),
                game_id=str(game_id),
                name=name,
                points=achievement.points,
                created_at=now,
            )
        )
        return achievement

    def update(self, name=None, description=None, points=None, logo_url=None):
        if self.is_deleted:
            raise ValidationError({"is_deleted": ["Achievement has been deleted"]})
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if points is not None:
            self.points = points
        if logo_url is not None:
            self.logo_url = logo_url
        self.updated_at = datetime.now(UTC)

    def delete(self):
        if self.is_deleted:
            raise ValidationError({"is_deleted": ["Achievement has already been deleted"]})
        now = datetime.now(UTC)
        self.is_deleted = True
        self.updated_at = now
        self.raise_(AchievementDeleted(achievement_id=str(self.id), deleted_at=now))

    def restore(self):
        if not self.is_deleted:
            raise ValidationError({"is_deleted": ["Achievement is not deleted"]})
        self.is_deleted = False
        self.updated_at = datetime.now(UTC)


@library.aggregate
class UserAchievement:
    user_id = Identifier(required=True)
    achievement_id = Identifier(required=True)
    game_id = Identifier(required=True)
    achieved_at = DateTime(required=True)

    @classmethod
    def unlock(cls, user_id, achievement):
        now = datetime.now(UTC)
        record = cls(
            user_id=user_id,
            achievement_id=str(achievement.id),
            game_id=str(achievement.game_id),
            achieved_at=now,
        )
        record.raise_(
            AchievementUnlocked(
                user_achievement_id=str(record.id),
                user_id=str(user_id),
                achievement_id=str(achievement.id),
                game_id=str(achievement.game_id),
                points=achievement.points or 0,
                achieved_at=now,
            )
        )
        return record
