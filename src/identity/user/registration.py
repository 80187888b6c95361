"""User registration — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class RegisterUser:
    """Create the store account for an identity-provider subject on first sign-in."""

    external_id: String(required=True, max_length=255)
    username: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)


def find_user_by_external_id(external_id):
    users = current_domain.repository_for(User)._dao.query.filter(external_id=external_id).limit(None).all().items
    return users[0] if users else None


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if find_user_by_external_id(command.external_id) is not None:
            raise ValidationError({"external_id": ["A user with this subject id already exists"]})

        email = command.email.strip().lower()
        if repo._dao.query.filter(email=email).limit(None).all().items:
            raise ValidationError({"email": ["A user with this email already exists"]})

        user = User.register(
            external_id=command.external_id,
            username=command.username,
            email=email,
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), external_id=command.external_id)
        return str(user.id)
