"""Application tests for the wishlist."""

import pytest
from library.ownership.grants import GrantAddon, GrantGame
from library.wishlist.management import AddToWishlist, RemoveFromWishlist, wishlist_of
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _process(command):
    return current_domain.process(command, asynchronous=False)


class TestWishlist:
    def test_add_in_order(self):
        _process(AddToWishlist(user_id="user-001", product_id="game-002"))
        _process(AddToWishlist(user_id="user-001", product_id="game-001"))
        assert [str(i.product_id) for i in wishlist_of("user-001")] == ["game-002", "game-001"]

    def test_no_duplicates(self):
        _process(AddToWishlist(user_id="user-001", product_id="game-001"))
        with pytest.raises(ValidationError):
            _process(AddToWishlist(user_id="user-001", product_id="game-001"))

    def test_owned_game_cannot_be_wished_for(self):
        _process(GrantGame(user_id="user-001", game_id="game-001"))
        with pytest.raises(ValidationError):
            _process(AddToWishlist(user_id="user-001", product_id="game-001"))

    def test_owned_addon_cannot_be_wished_for(self):
        _process(GrantGame(user_id="user-001", game_id="game-001"))
        _process(GrantAddon(user_id="user-001", game_id="game-001", addon_id="addon-001"))
        with pytest.raises(ValidationError):
            _process(AddToWishlist(user_id="user-001", product_id="addon-001"))

    def test_remove(self):
        _process(AddToWishlist(user_id="user-001", product_id="game-001"))
        _process(RemoveFromWishlist(user_id="user-001", product_id="game-001"))
        assert wishlist_of("user-001") == []

    def test_remove_missing_entry(self):
        with pytest.raises(ObjectNotFoundError):
            _process(RemoveFromWishlist(user_id="user-001", product_id="game-001"))
