"""User account lifecycle — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class DeactivateUser:
    """Block a user from shopping. Owned games stay in their library."""

    user_id: Identifier(required=True)
    reason: String(required=True, max_length=500)


@identity.command(part_of="User")
class ReactivateUser:
    user_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class ManageAccountHandler:
    @handle(DeactivateUser)
    def deactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deactivate(reason=command.reason)
        repo.add(user)
        logger.info("User deactivated", user_id=command.user_id, reason=command.reason)

    @handle(ReactivateUser)
    def reactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.reactivate()
        repo.add(user)
        logger.info("User reactivated", user_id=command.user_id)
