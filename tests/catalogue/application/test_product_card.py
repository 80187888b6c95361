"""Application tests for the ProductCard projection."""

import json

from catalogue.product.classification import AssignTags
from catalogue.product.creation import CreateAddon, CreateGame
from catalogue.product.details import ChangeProductPrice, UpdateProductDetails
from catalogue.product.lifecycle import ActivateProduct, DeleteProduct, RestoreProduct
from catalogue.projections.product_card import ProductCard
from catalogue.taxonomy.management import CreateTag
from protean import current_domain


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _card(product_id):
    return current_domain.repository_for(ProductCard).get(product_id)


class TestProductCard:
    def test_card_created_with_product(self):
        game_id = _process(CreateGame(title="Hollow Forge", price=24.99))
        card = _card(game_id)
        assert card.title == "Hollow Forge"
        assert card.product_type == "Game"
        assert card.is_active is False

    def test_addon_card_points_at_game(self):
        game_id = _process(CreateGame(title="Hollow Forge", price=24.99))
        addon_id = _process(CreateAddon(game_id=game_id, title="Soundtrack", price=4.99))
        assert str(_card(addon_id).game_id) == game_id

    def test_card_follows_details_and_price(self):
        game_id = _process(CreateGame(title="Hollow Forge", price=24.99))
        _process(UpdateProductDetails(product_id=game_id, title="Hollow Forge II", developer="Anvil Works"))
        _process(ChangeProductPrice(product_id=game_id, new_price=9.99))

        card = _card(game_id)
        assert card.title == "Hollow Forge II"
        assert card.developer == "Anvil Works"
        assert card.price == 9.99

    def test_card_follows_lifecycle(self):
        game_id = _process(CreateGame(title="Hollow Forge", price=24.99))
        _process(ActivateProduct(product_id=game_id))
        assert _card(game_id).is_active is True

        _process(DeleteProduct(product_id=game_id))
        card = _card(game_id)
        assert card.is_deleted is True
        assert card.is_active is False

        _process(RestoreProduct(product_id=game_id))
        assert _card(game_id).is_deleted is False

    def test_card_follows_classification(self):
        game_id = _process(CreateGame(title="Hollow Forge", price=24.99))
        tag_id = _process(CreateTag(title="Metroidvania"))
        _process(AssignTags(product_id=game_id, tag_ids=json.dumps([tag_id])))
        assert json.loads(_card(game_id).tag_ids) == [tag_id]
