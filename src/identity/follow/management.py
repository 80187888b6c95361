"""Following — commands, handler and the follower/following queries.

A user follows another existing user at most once. Unfollowing removes the
relation outright.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.follow.follow import Follow
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="Follow")
class FollowUser:
    follower_id: Identifier(required=True)
    followed_id: Identifier(required=True)


@identity.command(part_of="Follow")
class UnfollowUser:
    follower_id: Identifier(required=True)
    followed_id: Identifier(required=True)


def _follows(**filters):
    follows = current_domain.repository_for(Follow)._dao.query.filter(**filters).limit(None).all().items
    return sorted(follows, key=lambda f: f.followed_at)


def followers_of(user_id):
    """Ids of the users following ``user_id``, oldest first."""
    return [str(f.follower_id) for f in _follows(followed_id=str(user_id))]


def followed_by(user_id):
    """Ids of the users ``user_id`` follows, oldest first."""
    return [str(f.followed_id) for f in _follows(follower_id=str(user_id))]


def _existing_follow(follower_id, followed_id):
    follows = _follows(follower_id=str(follower_id), followed_id=str(followed_id))
    return follows[0] if follows else None


@identity.command_handler(part_of=Follow)
class ManageFollowHandler:
    @handle(FollowUser)
    def follow_user(self, command):
        users = current_domain.repository_for(User)
        for field in ("follower_id", "followed_id"):
            try:
                users.get(getattr(command, field))
            except ObjectNotFoundError:
                raise ValidationError({field: [f"User {getattr(command, field)} does not exist"]}) from None

        if _existing_follow(command.follower_id, command.followed_id) is not None:
            raise ValidationError({"followed_id": ["Already following this user"]})

        follow = Follow.start(command.follower_id, command.followed_id)
        current_domain.repository_for(Follow).add(follow)
        logger.info("User followed", follower_id=command.follower_id, followed_id=command.followed_id)
        return str(follow.id)

    @handle(UnfollowUser)
    def unfollow_user(self, command):
        follow = _existing_follow(command.follower_id, command.followed_id)
        if follow is None:
            raise ObjectNotFoundError(f"User {command.follower_id} does not follow {command.followed_id}")

        current_domain.repository_for(Follow)._dao.delete(follow)
        logger.info("User unfollowed", follower_id=command.follower_id, followed_id=command.followed_id)
