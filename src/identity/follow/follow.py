"""Follow aggregate — one user subscribing to another user's activity."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier

from identity.domain import identity
from identity.follow.events import UserFollowed


@identity.aggregate
class Follow:
    follower_id: Identifier(required=True)
    followed_id: Identifier(required=True)
    followed_at: DateTime()

    @invariant.post
    def users_cannot_follow_themselves(self):
        if str(self.follower_id) == str(self.followed_id):
            raise ValidationError({"followed_id": ["Users cannot follow themselves"]})

    @classmethod
    def start(cls, follower_id, followed_id):
        follow = cls(follower_id=follower_id, followed_id=followed_id, followed_at=datetime.now(UTC))
        follow.raise_(
            UserFollowed(
                follower_id=str(follower_id),
                followed_id=str(followed_id),
                followed_at=follow.followed_at,
            )
        )
        return follow
