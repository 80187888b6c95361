"""Domain events for the LibraryGame aggregate."""

from protean.fields import DateTime, Identifier

from library.domain import library


@library.event(part_of="LibraryGame")
class GameGranted:
    """A game entered a user's library (purchase, support grant or restore)."""

    __version__ = 1

    library_game_id = Identifier(required=True)
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    order_id = Identifier()
    granted_at = DateTime(required=True)


@library.event(part_of="LibraryGame")
class AddonGranted:
    __version__ = 1

    library_game_id = Identifier(required=True)
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    addon_id = Identifier(required=True)
    order_id = Identifier()
    granted_at = DateTime(required=True)


@library.event(part_of="LibraryGame")
class GameRevoked:
    """The game was taken out of the library, together with its addons."""

    __version__ = 1

    library_game_id = Identifier(required=True)
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    revoked_at = DateTime(required=True)


@library.event(part_of="LibraryGame")
class AddonRevoked:
    __version__ = 1

    library_game_id = Identifier(required=True)
    user_id = Identifier(required=True)
    addon_id = Identifier(required=True)
    revoked_at = DateTime(required=True)
