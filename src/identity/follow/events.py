"""Domain events for the Follow aggregate."""

from protean.fields import DateTime, Identifier

from identity.domain import identity


@identity.event(part_of="Follow")
class UserFollowed:
    __version__ = 1

    follower_id: Identifier(required=True)
    followed_id: Identifier(required=True)
    followed_at: DateTime(required=True)
