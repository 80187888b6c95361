"""Tests for the LibraryGame aggregate — ownership of games and their addons."""

import pytest
from library.ownership.events import AddonGranted, AddonRevoked, GameGranted, GameRevoked
from library.ownership.library_game import LibraryGame
from protean.exceptions import ValidationError


def _make_entry():
    return LibraryGame.grant(user_id="user-001", game_id="game-001", order_id="order-001")


class TestGrant:
    def test_grant_raises_event(self):
        entry = _make_entry()
        granted = [e for e in entry._events if isinstance(e, GameGranted)]
        assert len(granted) == 1
        assert granted[0].order_id == "order-001"

    def test_attach_addon(self):
        entry = _make_entry()
        assert entry.attach_addon("addon-001", order_id="order-002") is True
        assert entry.owned_addon_ids == ["addon-001"]
        assert any(isinstance(e, AddonGranted) for e in entry._events)

    def test_attaching_owned_addon_changes_nothing(self):
        entry = _make_entry()
        entry.attach_addon("addon-001")
        assert entry.attach_addon("addon-001") is False
        assert len(entry.addons) == 1


class TestRevoke:
    def test_revoking_a_game_revokes_its_addons(self):
        entry = _make_entry()
        entry.attach_addon("addon-001")

        entry.revoke()

        assert entry.is_deleted
        assert entry.owned_addon_ids == []
        assert any(isinstance(e, GameRevoked) for e in entry._events)

    def test_cannot_revoke_twice(self):
        entry = _make_entry()
        entry.revoke()
        with pytest.raises(ValidationError):
            entry.revoke()

    def test_revoke_addon(self):
        entry = _make_entry()
        entry.attach_addon("addon-001")
        entry.revoke_addon("addon-001")
        assert entry.owned_addon_ids == []
        assert any(isinstance(e, AddonRevoked) for e in entry._events)

    def test_revoke_unowned_addon(self):
        with pytest.raises(ValidationError):
            _make_entry().revoke_addon("addon-404")

    def test_revoked_addon_can_be_bought_again(self):
        entry = _make_entry()
        entry.attach_addon("addon-001", order_id="order-002")
        entry.revoke_addon("addon-001")

        assert entry.attach_addon("addon-001", order_id="order-003") is True
        assert len(entry.addons) == 1
        assert str(entry.addons[0].order_id) == "order-003"

    def test_addon_needs_a_live_game(self):
        entry = _make_entry()
        entry.revoke()
        with pytest.raises(ValidationError):
            entry.attach_addon("addon-001")


class TestRestore:
    def test_restore_keeps_addons_revoked(self):
        entry = _make_entry()
        entry.attach_addon("addon-001")
        entry.revoke()

        entry.restore(order_id="order-009")

        assert entry.is_deleted is False
        assert str(entry.order_id) == "order-009"
        assert entry.owned_addon_ids == []

    def test_restore_requires_revocation(self):
        with pytest.raises(ValidationError):
            _make_entry().restore()
