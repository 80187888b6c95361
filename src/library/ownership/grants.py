"""Ownership grants — turning paid orders into library entries.

Used both by the Store event handler and by the support commands below.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from library.domain import library
from library.ownership.library_game import LibraryGame

logger = structlog.get_logger(__name__)

GAME = "Game"
ADDON = "Addon"


def library_entry(user_id, game_id):
    """The user's entry for a game, deleted or not, or None."""
    entries = (
        current_domain.repository_for(LibraryGame)
        ._dao.query.filter(user_id=str(user_id), game_id=str(game_id))
        .limit(None)
        .all()
        .items
    )
    return entries[0] if entries else None


def owns_game(user_id, game_id):
    entry = library_entry(user_id, game_id)
    return entry is not None and not entry.is_deleted


def owned_games(user_id):
    return (
        current_domain.repository_for(LibraryGame)
        ._dao.query.filter(user_id=str(user_id), is_deleted=False)
        .limit(None)
        .all()
        .items
    )


def grant_game(user_id, game_id, order_id=None):
    """Add a game to the library. Returns the entry and whether anything changed."""
    entry = library_entry(user_id, game_id)
    if entry is None:
        return LibraryGame.grant(user_id=user_id, game_id=game_id, order_id=order_id), True
    if entry.is_deleted:
        entry.restore(order_id=order_id)
        return entry, True
    return entry, False


def grant_items(user_id, order_id, items):
    """Grant every game and addon of a paid order, games first.

    An addon whose base game is missing grants the base game as well.
    Returns the touched entries, ready to be persisted.
    """
    touched = {}

    for item in items:
        if item["product_type"] != GAME:
            continue
        entry, changed = grant_game(user_id, item["product_id"], order_id)
        if changed:
            touched[str(entry.game_id)] = entry
        else:
            logger.info("Game already owned", user_id=str(user_id), game_id=item["product_id"])

    for item in items:
        if item["product_type"] != ADDON:
            continue
        game_id = str(item["game_id"])
        entry = touched.get(game_id)
        if entry is None:
            entry, _ = grant_game(user_id, game_id, order_id)
        if entry.attach_addon(item["product_id"], order_id=order_id):
            touched[game_id] = entry

    return list(touched.values())


def revoke_items(user_id, order_id, items):
    """Soft delete what a refunded order granted. Returns the touched entries."""
    touched = {}

    for item in items:
        game_id = str(item["product_id"] if item["product_type"] == GAME else item["game_id"])
        entry = touched.get(game_id) or library_entry(user_id, game_id)
        if entry is None or entry.is_deleted:
            continue

        if item["product_type"] == GAME:
            if str(entry.order_id) == str(order_id):
                entry.revoke()
                touched[game_id] = entry
        else:
            addon = entry._find_addon(item["product_id"])
            if addon is not None and not addon.is_deleted and str(addon.order_id) == str(order_id):
                entry.revoke_addon(item["product_id"])
                touched[game_id] = entry

    return list(touched.values())


# ---------------------------------------------------------------------------
# Support commands
# ---------------------------------------------------------------------------
@library.command(part_of="LibraryGame")
class GrantGame:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)


@library.command(part_of="LibraryGame")
class GrantAddon:
    user_id = Identifier(required=True)
    game_id = Identifier(required=True)
    addon_id = Identifier(required=True)


@library.command(part_of="LibraryGame")
class RemoveLibraryGame:
    library_game_id = Identifier(required=True)


@library.command(part_of="LibraryGame")
class RestoreLibraryGame:
    library_game_id = Identifier(required=True)


@library.command_handler(part_of=LibraryGame)
class ManageOwnershipHandler:
    @handle(GrantGame)
    def grant_game(self, command):
        entry, changed = grant_game(command.user_id, command.game_id)
        if not changed:
            raise ValidationError({"game_id": ["User already owns this game"]})
        current_domain.repository_for(LibraryGame).add(entry)
        logger.info("Game granted", user_id=command.user_id, game_id=command.game_id)
        return str(entry.id)

    @handle(GrantAddon)
    def grant_addon(self, command):
        entry = library_entry(command.user_id, command.game_id)
        if entry is None or entry.is_deleted:
            raise ValidationError({"game_id": ["User does not own the base game"]})
        if not entry.attach_addon(command.addon_id):
            raise ValidationError({"addon_id": ["User already owns this addon"]})
        current_domain.repository_for(LibraryGame).add(entry)

    @handle(RemoveLibraryGame)
    def remove_library_game(self, command):
        repo = current_domain.repository_for(LibraryGame)
        entry = repo.get(command.library_game_id)
        entry.revoke()
        repo.add(entry)

    @handle(RestoreLibraryGame)
    def restore_library_game(self, command):
        repo = current_domain.repository_for(LibraryGame)
        entry = repo.get(command.library_game_id)
        entry.restore()
        repo.add(entry)
