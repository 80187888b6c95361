"""Discount management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from store.discount.discount import Discount
from store.domain import store
from store.pricing.lookup import find_product_price

logger = structlog.get_logger(__name__)


@store.command(part_of="Discount")
class CreateDiscount:
    name = String(required=True, max_length=50)
    discount_type = String(required=True)
    discount_value = Float(required=True)
    start_date = DateTime()
    end_date = DateTime()


@store.command(part_of="Discount")
class UpdateDiscount:
    discount_id = Identifier(required=True)
    name = String(required=True, max_length=50)
    discount_type = String(required=True)
    discount_value = Float(required=True)
    start_date = DateTime()
    end_date = DateTime()


@store.command(part_of="Discount")
class AssignProductToDiscount:
    discount_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.command(part_of="Discount")
class UnassignProductFromDiscount:
    discount_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.command(part_of="Discount")
class DeleteDiscount:
    discount_id = Identifier(required=True)


@store.command_handler(part_of=Discount)
class ManageDiscountHandler:
    @handle(CreateDiscount)
    def create_discount(self, command):
        discount = Discount.create(
            name=command.name,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            start_date=command.start_date,
            end_date=command.end_date,
        )
        current_domain.repository_for(Discount).add(discount)
        logger.info(
            "Discount created",
            discount_id=str(discount.id),
            discount_type=discount.discount_type,
            discount_value=discount.discount_value,
        )
        return str(discount.id)

    @handle(UpdateDiscount)
    def update_discount(self, command):
        repo = current_domain.repository_for(Discount)
        discount = repo.get(command.discount_id)
        discount.update(
            name=command.name,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            start_date=command.start_date,
            end_date=command.end_date,
        )
        repo.add(discount)

    @handle(AssignProductToDiscount)
    def assign_product(self, command):
        if find_product_price(command.product_id) is None:
            raise ValidationError({"product_id": ["Product is not available in the store"]})

        repo = current_domain.repository_for(Discount)
        discount = repo.get(command.discount_id)
        discount.assign_product(command.product_id)
        repo.add(discount)

    @handle(UnassignProductFromDiscount)
    def unassign_product(self, command):
        repo = current_domain.repository_for(Discount)
        discount = repo.get(command.discount_id)
        discount.unassign_product(command.product_id)
        repo.add(discount)

    @handle(DeleteDiscount)
    def delete_discount(self, command):
        repo = current_domain.repository_for(Discount)
        discount = repo.get(command.discount_id)
        discount.delete()
        repo.add(discount)
        logger.info("Discount deleted", discount_id=str(discount.id))
