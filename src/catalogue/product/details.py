"""Product details and pricing — commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    title: String(max_length=255)
    short_description: String(max_length=500)
    description: Text()
    developer: String(max_length=255)
    system_requirements: Text()


@catalogue.command(part_of="Product")
class ChangeProductPrice:
    product_id: Identifier(required=True)
    new_price: Float(required=True)


@catalogue.command_handler(part_of=Product)
class UpdateProductDetailsHandler:
    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            title=command.title,
            short_description=command.short_description,
            description=command.description,
            developer=command.developer,
            system_requirements=command.system_requirements,
        )
        repo.add(product)

    @handle(ChangeProductPrice)
    def change_product_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(command.new_price)
        repo.add(product)
