"""LibraryGame aggregate — a game a user owns, plus the addons bought for it.

Entries are never removed. Refunds and support removals soft delete them
so a later purchase or restore brings back the same entry.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier

from library.domain import library
from library.ownership.events import AddonGranted, AddonRevoked, GameGranted, GameRevoked


@library.entity(part_of="LibraryGame")
class LibraryAddon:
    addon_id = Identifier(required=True)
    order_id = Identifier()
    purchased_at = DateTime(required=True)
    is_deleted = Boolean(default=False)


@library.aggregate
class LibraryGame:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    order_id = Identifier()
    purchased_at = DateTime(required=True)
    is_deleted = Boolean(default=False)
    addons = HasMany(LibraryAddon)

    @classmethod
    def grant(cls, user_id, game_id, order_id=None):
        now = datetime.now(UTC)
        entry = cls(user_id=user_id, game_id=game_id, order_id=order_id, purchased_at=now)
        entry._raise_granted(now)
        return entry

    @property
    def owned_addon_ids(self):
        return [str(a.addon_id) for a in self.addons if not a.is_deleted]

    def _find_addon(self, addon_id):
        return next((a for a in self.addons if str(a.addon_id) == str(addon_id)), None)

    def _raise_granted(self, now):
        self.raise_(
            GameGranted(
                library_game_id=str(self.id),
                user_id=str(self.user_id),
                game_id=str(self.game_id),
                order_id=str(self.order_id) if self.order_id else None,
                granted_at=now,
            )
        )

    def restore(self, order_id=None):
        """Bring a revoked game back. Addons stay revoked until bought again."""
        if not self.is_deleted:
            raise ValidationError({"is_deleted": ["Game is already in the library"]})

        now = datetime.now(UTC)
        self.is_deleted = False
        self.purchased_at = now
        if order_id:
            self.order_id = order_id
        self._raise_granted(now)

    def revoke(self):
        if self.is_deleted:
            raise ValidationError({"is_deleted": ["Game is not in the library"]})

        now = datetime.now(UTC)
        self.is_deleted = True
        for addon in self.addons:
            addon.is_deleted = True
        self.raise_(
            GameRevoked(
                library_game_id=str(self.id),
                user_id=str(self.user_id),
                game_id=str(self.game_id),
                revoked_at=now,
            )
        )

    def attach_addon(self, addon_id, order_id=None):
        """Record an addon purchase. Returns False when the addon is already owned."""
        if self.is_deleted:
            raise ValidationError({"is_deleted": ["Base game is not in the library"]})

        now = datetime.now(UTC)
        addon = self._find_addon(addon_id)
        if addon is not None and not addon.is_deleted:
            return False
        if addon is None:
            self.add_addons(LibraryAddon(addon_id=addon_id, order_id=order_id, purchased_at=now))
        else:
            addon.is_deleted = False
            addon.order_id = order_id
            addon.purchased_at = now

        self.raise_(
            AddonGranted(
                library_game_id=str(self.id),
                user_id=str(self.user_id),
                game_id=str(self.game_id),
                addon_id=str(addon_id),
                order_id=str(order_id) if order_id else None,
                granted_at=now,
            )
        )
        return True

    def revoke_addon(self, addon_id):
        addon = self._find_addon(addon_id)
        if addon is None or addon.is_deleted:
            raise ValidationError({"addons": [f"Addon {addon_id} is not owned"]})

        addon.is_deleted = True
        self.raise_(
            AddonRevoked(
                library_game_id=str(self.id),
                user_id=str(self.user_id),
                addon_id=str(addon_id),
                revoked_at=datetime.now(UTC),
            )
        )
