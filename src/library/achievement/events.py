"""Domain events for achievements."""

from protean.fields import DateTime, Identifier, Integer, String

from library.domain import library


@library.event(part_of="Achievement")
class AchievementCreated:
    __version__ = 1

    achievement_id = Identifier(required=True)
    game_id = Identifier(required=True)
    name = String(required=True)
    points = Integer(required=True)
    created_at = DateTime(required=True)


@library.event(part_of="Achievement")
class AchievementDeleted:
    __version__ = 1

    achievement_id = Identifier(required=True)
    deleted_at = DateTime(required=True)


@library.event(part_of="UserAchievement")
class AchievementUnlocked:
    """A user earned an achievement in a game they own."""

    __version__ = 1

    user_achievement_id = Identifier(required=True)
    user_id = Identifier(required=True)
    achievement_id = Identifier(required=True)
    game_id = Identifier(required=True)
    points = Integer(required=True)
    achieved_at = DateTime(required=True)
