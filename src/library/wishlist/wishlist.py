"""WishlistItem aggregate — a product a user wants to buy later."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier

from library.domain import library


@library.aggregate
class WishlistItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    added_at = DateTime()

    @classmethod
    def add(cls, user_id, product_id):
        return cls(user_id=user_id, product_id=product_id, added_at=datetime.now(UTC))
