"""Cross-domain event contracts for Identity domain events.

These classes define the event shape for consumption by other domains
(the Store domain blocks checkout for deactivated users). They are
registered as external events via domain.register_external_event()
with matching __type__ strings so Protean's stream deserialization
works correctly.

The source-of-truth events are in src/identity/user/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, String


class UserRegistered(BaseEvent):
    """A user signed in for the first time and got a store account."""

    __version__ = 1

    user_id = Identifier(required=True)
    external_id = String(required=True)
    username = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


class UserDeactivated(BaseEvent):
    """A user account was deactivated."""

    __version__ = 1

    user_id = Identifier(required=True)
    reason = String(required=True)
    deactivated_at = DateTime(required=True)


class UserReactivated(BaseEvent):
    """A deactivated user account was restored."""

    __version__ = 1

    user_id = Identifier(required=True)
    reactivated_at = DateTime(required=True)
