"""Product creation — commands and handler for games and addons."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product, ProductType

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class CreateGame:
    title: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    short_description: String(max_length=500)
    description: Text()
    developer: String(max_length=255)
    system_requirements: Text()


@catalogue.command(part_of="Product")
class CreateAddon:
    game_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    short_description: String(max_length=500)
    description: Text()
    developer: String(max_length=255)


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateGame)
    def create_game(self, command):
        product = Product.create(
            product_type=ProductType.GAME.value,
            title=command.title,
            price=command.price,
            short_description=command.short_description,
            description=command.description,
            developer=command.developer,
            system_requirements=command.system_requirements,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Game created", product_id=str(product.id), title=product.title)
        return str(product.id)

    @handle(CreateAddon)
    def create_addon(self, command):
        try:
            game = current_domain.repository_for(Product).get(command.game_id)
        except ObjectNotFoundError:
            raise ValidationError({"game_id": ["Base game does not exist"]}) from None
        if not game.is_game:
            raise ValidationError({"game_id": ["Addons can only extend a game"]})
        if game.is_deleted:
            raise ValidationError({"game_id": ["Base game has been deleted"]})

        product = Product.create(
            product_type=ProductType.ADDON.value,
            title=command.title,
            price=command.price,
            game_id=str(game.id),
            short_description=command.short_description,
            description=command.description,
            developer=command.developer,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Addon created", product_id=str(product.id), game_id=str(game.id))
        return str(product.id)
