"""Domain events for the User aggregate.

UserRegistered, UserDeactivated and UserReactivated are consumed by the
Store domain; their contracts live in src/shared/events/identity.py.
"""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A user signed in for the first time and got a store account."""

    __version__ = 1

    user_id: Identifier(required=True)
    external_id: String(required=True)
    username: String(required=True)
    email: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    first_name: String()
    last_name: String()
    country: String()
    city: String()
    custom_url: String()
    modified_at: DateTime(required=True)


@identity.event(part_of="User")
class UserDeactivated:
    """A user account was deactivated."""

    __version__ = 1

    user_id: Identifier(required=True)
    reason: String(required=True)
    deactivated_at: DateTime(required=True)


@identity.event(part_of="User")
class UserReactivated:
    """A deactivated user account was restored."""

    __version__ = 1

    user_id: Identifier(required=True)
    reactivated_at: DateTime(required=True)
