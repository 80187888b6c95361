"""Product lifecycle management — commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class ActivateProduct:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class RestoreProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageLifecycleHandler:
    @handle(ActivateProduct)
    def activate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.activate()
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.delete()
        repo.add(product)

    @handle(RestoreProduct)
    def restore_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restore()
        repo.add(product)
