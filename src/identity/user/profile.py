"""User profile management — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import PROFILE_FIELDS, User


@identity.command(part_of="User")
class UpdateProfile:
    """Partial update: fields left empty keep their current value."""

    user_id: Identifier(required=True)
    username: String(max_length=50)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    country: String(max_length=100)
    city: String(max_length=100)
    avatar_url: String(max_length=500)
    self_description: Text()
    show_personal_info: Boolean()
    custom_url: String(max_length=50)


@identity.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        changes = {field: getattr(command, field) for field in PROFILE_FIELDS if getattr(command, field) is not None}
        if changes.get("custom_url"):
            taken = repo._dao.query.filter(custom_url=changes["custom_url"]).limit(None).all().items
            if any(str(other.id) != str(user.id) for other in taken):
                raise ValidationError({"custom_url": ["This custom URL is already taken"]})

        user.update_profile(**changes)
        repo.add(user)
