"""Read-side helpers for discounts."""

from datetime import datetime

from protean.utils.globals import current_domain

from store.discount.discount import Discount


def all_discounts(include_deleted: bool = False) -> list[Discount]:
    query = current_domain.repository_for(Discount)._dao.query
    if not include_deleted:
        query = query.filter(is_deleted=False)
    return query.limit(None).all().items


def discounts_active_at(moment: datetime) -> list[Discount]:
    return [d for d in all_discounts() if d.is_active_at(moment)]
