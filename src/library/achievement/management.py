"""Achievement management and unlocking — commands and handlers."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from library.achievement.achievement import Achievement, UserAchievement
from library.domain import library
from library.ownership.grants import owns_game

logger = structlog.get_logger(__name__)


@library.command(part_of="Achievement")
class CreateAchievement:
    game_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = Text()
    points = Integer(default=0, min_value=0)
    logo_url = String(max_length=500)


@library.command(part_of="Achievement")
class UpdateAchievement:
    achievement_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    points = Integer(min_value=0)
    logo_url = String(max_length=500)


@library.command(part_of="Achievement")
class DeleteAchievement:
    achievement_id = Identifier(required=True)


@library.command(part_of="Achievement")
class RestoreAchievement:
    achievement_id = Identifier(required=True)


@library.command(part_of="UserAchievement")
class UnlockAchievement:
    user_id = Identifier(required=True)
    achievement_id = Identifier(required=True)


def achievements_of_game(game_id, include_deleted=False):
    query = current_domain.repository_for(Achievement)._dao.query.filter(game_id=str(game_id))
    if not include_deleted:
        query = query.filter(is_deleted=False)
    return query.limit(None).all().items


def achievements_of_user(user_id, game_id=None):
    query = current_domain.repository_for(UserAchievement)._dao.query.filter(user_id=str(user_id))
    if game_id is not None:
        query = query.filter(game_id=str(game_id))
    return query.limit(None).all().items


@library.command_handler(part_of=Achievement)
class ManageAchievementHandler:
    @handle(CreateAchievement)
    def create_achievement(self, command):
        for existing in achievements_of_game(command.game_id):
            if existing.name.strip().lower() == command.name.strip().lower():
                raise ValidationError({"name": ["The game already has an achievement with this name"]})

        achievement = Achievement.create(
            game_id=command.game_id,
            name=command.name,
            description=command.description,
            points=command.points,
            logo_url=command.logo_url,
        )
        current_domain.repository_for(Achievement).add(achievement)
        return str(achievement.id)

    @handle(UpdateAchievement)
    def update_achievement(self, command):
        repo = current_domain.repository_for(Achievement)
        achievement = repo.get(command.achievement_id)
        achievement.update(
            name=command.name,
            description=command.description,
            points=command.points,
            logo_url=command.logo_url,
        )
        repo.add(achievement)

    @handle(DeleteAchievement)
    def delete_achievement(self, command):
        repo = current_domain.repository_for(Achievement)
        achievement = repo.get(command.achievement_id)
        achievement.delete()
        repo.add(achievement)

    @handle(RestoreAchievement)
    def restore_achievement(self, command):
        repo = current_domain.repository_for(Achievement)
        achievement = repo.get(command.achievement_id)
        achievement.restore()
        repo.add(achievement)


@library.command_handler(part_of=UserAchievement)
class UnlockAchievementHandler:
    @handle(UnlockAchievement)
    def unlock_achievement(self, command):
        achievement = current_domain.repository_for(Achievement).get(command.achievement_id)
        if achievement.is_deleted:
            raise ValidationError({"achievement_id": ["Achievement has been deleted"]})
        if not owns_game(command.user_id, achievement.game_id):
            raise ValidationError({"user_id": ["User does not own the game"]})

        unlocked = current_domain.repository_for(UserAchievement)._dao.query.filter(
            user_id=str(command.user_id), achievement_id=str(achievement.id)
        )
        if unlocked.limit(None).all().items:
            raise ValidationError({"achievement_id": ["Achievement already unlocked"]})

        record = UserAchievement.unlock(command.user_id, achievement)
        current_domain.repository_for(UserAchievement).add(record)
        logger.info(
            "Achievement unlocked",
            user_id=command.user_id,
            achievement_id=str(achievement.id),
            game_id=str(achievement.game_id),
        )
        return str(record.id)
