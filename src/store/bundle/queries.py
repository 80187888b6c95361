"""Read-side helpers for bundles."""

from datetime import datetime

from protean.utils.globals import current_domain

from store.bundle.bundle import Bundle


def all_bundles() -> list[Bundle]:
    return current_domain.repository_for(Bundle)._dao.query.limit(None).all().items


def available_bundles(moment: datetime | None = None) -> list[Bundle]:
    return [b for b in all_bundles() if b.is_available(moment)]
