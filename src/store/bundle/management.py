"""Bundle management — commands and handler.

Every change to the total or to the membership re-spreads the total over
the members, using list prices from the Store's ProductPrice list.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from store.bundle.bundle import Bundle
from store.domain import store
from store.pricing.lookup import find_product_price

logger = structlog.get_logger(__name__)


@store.command(part_of="Bundle")
class CreateBundle:
    title = String(required=True, max_length=255)
    description = Text()
    total_price = Float(required=True, min_value=0.0)
    is_active = Boolean(default=True)
    expires_at = DateTime()
    product_ids = Text()  # JSON: list of product ids


@store.command(part_of="Bundle")
class UpdateBundle:
    bundle_id = Identifier(required=True)
    title = String(max_length=255)
    description = Text()
    total_price = Float(min_value=0.0)
    is_active = Boolean()
    expires_at = DateTime()


@store.command(part_of="Bundle")
class AddProductToBundle:
    bundle_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.command(part_of="Bundle")
class RemoveProductFromBundle:
    bundle_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.command(part_of="Bundle")
class DeactivateBundle:
    bundle_id = Identifier(required=True)


def list_prices_for(product_ids) -> dict[str, float]:
    """Current list prices of the given products; unknown products count as free."""
    prices = {}
    for product_id in product_ids:
        product = find_product_price(product_id)
        prices[str(product_id)] = product.price if product is not None else 0.0
    return prices


def _ensure_known_product(product_id):
    if find_product_price(product_id) is None:
        raise ValidationError({"product_id": [f"Product {product_id} is not available in the store"]})


@store.command_handler(part_of=Bundle)
class ManageBundleHandler:
    @handle(CreateBundle)
    def create_bundle(self, command):
        product_ids = json.loads(command.product_ids) if command.product_ids else []
        for product_id in product_ids:
            _ensure_known_product(product_id)

        bundle = Bundle.create(
            title=command.title,
            description=command.description,
            total_price=command.total_price,
            expires_at=command.expires_at,
            is_active=command.is_active if command.is_active is not None else True,
        )
        for product_id in product_ids:
            bundle.add_product(product_id, list_prices_for([*bundle.member_ids, product_id]))

        current_domain.repository_for(Bundle).add(bundle)
        logger.info(
            "Bundle created",
            bundle_id=str(bundle.id),
            total_price=bundle.total_price,
            member_count=len(product_ids),
        )
        return str(bundle.id)

    @handle(UpdateBundle)
    def update_bundle(self, command):
        repo = current_domain.repository_for(Bundle)
        bundle = repo.get(command.bundle_id)

        kwargs = {}
        if command.title is not None:
            kwargs["title"] = command.title
        if command.description is not None:
            kwargs["description"] = command.description
        if command.total_price is not None:
            kwargs["total_price"] = command.total_price
        if command.is_active is not None:
            kwargs["is_active"] = command.is_active
        if command.expires_at is not None:
            kwargs["expires_at"] = command.expires_at

        bundle.update(list_prices_for(bundle.member_ids), **kwargs)
        repo.add(bundle)

    @handle(AddProductToBundle)
    def add_product(self, command):
        _ensure_known_product(command.product_id)

        repo = current_domain.repository_for(Bundle)
        bundle = repo.get(command.bundle_id)
        bundle.add_product(command.product_id, list_prices_for([*bundle.member_ids, command.product_id]))
        repo.add(bundle)

    @handle(RemoveProductFromBundle)
    def remove_product(self, command):
        repo = current_domain.repository_for(Bundle)
        bundle = repo.get(command.bundle_id)
        bundle.remove_product(command.product_id, list_prices_for(bundle.member_ids))
        repo.add(bundle)

    @handle(DeactivateBundle)
    def deactivate_bundle(self, command):
        repo = current_domain.repository_for(Bundle)
        bundle = repo.get(command.bundle_id)
        bundle.deactivate()
        repo.add(bundle)
        logger.info("Bundle deactivated", bundle_id=str(bundle.id))
