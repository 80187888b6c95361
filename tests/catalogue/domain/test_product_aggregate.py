"""Tests for the Product aggregate — games, addons, pricing and lifecycle."""

import json

import pytest
from catalogue.product.events import (
    ProductActivated,
    ProductClassified,
    ProductCreated,
    ProductDeleted,
    ProductPriceChanged,
    ProductRestored,
)
from catalogue.product.product import Product, ProductType
from protean.exceptions import ValidationError


def _make_game(**overrides):
    fields = {"product_type": ProductType.GAME.value, "title": "Hollow Forge", "price": 24.99}
    fields.update(overrides)
    return Product.create(**fields)


class TestCreate:
    def test_new_game_is_inactive(self):
        game = _make_game()
        assert game.is_game
        assert game.is_active is False
        assert game.classification_ids("genres") == []

    def test_create_raises_event(self):
        game = _make_game()
        created = [e for e in game._events if isinstance(e, ProductCreated)]
        assert len(created) == 1
        assert created[0].price == 24.99
        assert created[0].game_id is None

    def test_addon_requires_a_game(self):
        with pytest.raises(ValidationError) as exc:
            Product.create(product_type=ProductType.ADDON.value, title="Soundtrack", price=4.99)
        assert "game_id" in exc.value.messages

    def test_game_cannot_point_at_a_game(self):
        with pytest.raises(ValidationError):
            _make_game(game_id="game-001")

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_game(price=-1.0)

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_game(product_type="Bundle")


class TestPricing:
    def test_change_price(self):
        game = _make_game()
        game.change_price(19.99)
        assert game.price == 19.99
        changed = next(e for e in game._events if isinstance(e, ProductPriceChanged))
        assert changed.previous_price == 24.99
        assert changed.new_price == 19.99

    def test_same_price_raises_no_event(self):
        game = _make_game()
        game.change_price(24.99)
        assert not any(isinstance(e, ProductPriceChanged) for e in game._events)

    def test_negative_price_change_is_rejected(self):
        game = _make_game()
        with pytest.raises(ValidationError):
            game.change_price(-5)

    def test_update_details_keeps_unspecified_fields(self):
        game = _make_game(developer="Anvil Works")
        game.update_details(title="Hollow Forge: Remastered")
        assert game.title == "Hollow Forge: Remastered"
        assert game.developer == "Anvil Works"


class TestLifecycle:
    def test_activate(self):
        game = _make_game()
        game.activate()
        assert game.is_active
        assert any(isinstance(e, ProductActivated) for e in game._events)

    def test_cannot_activate_twice(self):
        game = _make_game()
        game.activate()
        with pytest.raises(ValidationError):
            game.activate()

    def test_cannot_deactivate_inactive_product(self):
        with pytest.raises(ValidationError):
            _make_game().deactivate()

    def test_delete_takes_product_off_sale(self):
        game = _make_game()
        game.activate()
        game.delete()
        assert game.is_deleted
        assert game.is_active is False
        assert any(isinstance(e, ProductDeleted) for e in game._events)

    def test_deleted_product_cannot_change(self):
        game = _make_game()
        game.delete()
        with pytest.raises(ValidationError):
            game.change_price(10.0)
        with pytest.raises(ValidationError):
            game.activate()

    def test_restore_leaves_product_inactive(self):
        game = _make_game()
        game.delete()
        game.restore()
        assert game.is_deleted is False
        assert game.is_active is False
        assert any(isinstance(e, ProductRestored) for e in game._events)

    def test_restore_requires_deletion(self):
        with pytest.raises(ValidationError):
            _make_game().restore()


class TestClassification:
    def test_classify_deduplicates(self):
        game = _make_game()
        game.classify("tags", ["tag-1", "tag-2", "tag-1"])
        assert game.classification_ids("tags") == ["tag-1", "tag-2"]
        classified = next(e for e in game._events if isinstance(e, ProductClassified))
        assert json.loads(classified.ids) == ["tag-1", "tag-2"]

    def test_classify_replaces_previous_ids(self):
        game = _make_game()
        game.classify("genres", ["genre-1"])
        game.classify("genres", ["genre-2"])
        assert game.classification_ids("genres") == ["genre-2"]

    def test_unknown_classification(self):
        with pytest.raises(ValidationError):
            _make_game().classify("platforms", ["pc"])
