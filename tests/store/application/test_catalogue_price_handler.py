"""Application tests for CataloguePriceEventHandler — Catalogue events feed the Store price list."""

from datetime import UTC, datetime

from protean import current_domain
from shared.events.catalogue import (
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductDeleted,
    ProductDetailsUpdated,
    ProductPriceChanged,
)
from store.pricing.catalogue_events import CataloguePriceEventHandler
from store.pricing.product_price import ProductPrice


def _now():
    return datetime.now(UTC)


def _price(product_id):
    return current_domain.repository_for(ProductPrice).get(product_id)


def _created(handler, product_id="game-001", **overrides):
    fields = {
        "product_id": product_id,
        "product_type": "Game",
        "title": "Anvil Quest",
        "price": 29.99,
        "is_active": False,
        "created_at": _now(),
    }
    fields.update(overrides)
    handler.on_product_created(ProductCreated(**fields))


class TestCataloguePriceEventHandler:
    def test_created_product_is_priced(self):
        handler = CataloguePriceEventHandler()
        _created(handler, "addon-001", product_type="Addon", game_id="game-001")

        record = _price("addon-001")
        assert record.price == 29.99
        assert record.product_type == "Addon"
        assert str(record.game_id) == "game-001"
        assert record.is_active is False

    def test_price_change_updates_list_price(self):
        handler = CataloguePriceEventHandler()
        _created(handler)

        handler.on_product_price_changed(
            ProductPriceChanged(product_id="game-001", previous_price=29.99, new_price=19.99, changed_at=_now())
        )

        assert _price("game-001").price == 19.99

    def test_rename_updates_title(self):
        handler = CataloguePriceEventHandler()
        _created(handler)

        handler.on_product_details_updated(
            ProductDetailsUpdated(product_id="game-001", title="Anvil Quest II", updated_at=_now())
        )

        assert _price("game-001").title == "Anvil Quest II"

    def test_availability_follows_lifecycle(self):
        handler = CataloguePriceEventHandler()
        _created(handler)

        handler.on_product_activated(ProductActivated(product_id="game-001", activated_at=_now()))
        assert _price("game-001").is_active is True

        handler.on_product_deactivated(ProductDeactivated(product_id="game-001", deactivated_at=_now()))
        assert _price("game-001").is_active is False

        handler.on_product_activated(ProductActivated(product_id="game-001", activated_at=_now()))
        handler.on_product_deleted(ProductDeleted(product_id="game-001", deleted_at=_now()))
        assert _price("game-001").is_active is False

    def test_unknown_product_is_ignored(self):
        handler = CataloguePriceEventHandler()
        handler.on_product_price_changed(
            ProductPriceChanged(product_id="game-404", previous_price=1.0, new_price=2.0, changed_at=_now())
        )
        assert current_domain.repository_for(ProductPrice)._dao.query.all().items == []
