"""Taxonomy aggregates — genres, tags, mechanics and mature-content descriptors used to classify games.

These are small reference aggregates. They are never hard deleted, because
products keep pointing at them; deletion only hides them.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from catalogue.domain import catalogue


def soft_delete(term):
    """Hide a taxonomy term. Products keep their references."""
    if term.is_deleted:
        raise ValidationError({"is_deleted": [f"{type(term).__name__} has already been deleted"]})
    term.is_deleted = True
    term.updated_at = datetime.now(UTC)


@catalogue.aggregate
class Genre:
    name: String(required=True, max_length=100)
    is_deleted: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    def rename(self, name):
        self.name = name
        self.updated_at = datetime.now(UTC)


@catalogue.aggregate
class Tag:
    title: String(required=True, max_length=100)
    is_deleted: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    def rename(self, title):
        self.title = title
        self.updated_at = datetime.now(UTC)


@catalogue.aggregate
class Mechanic:
    name: String(required=True, max_length=100)
    description: Text()
    logo_url: String(max_length=500)
    is_deleted: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    def update_details(self, name=None, description=None, logo_url=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if logo_url is not None:
            self.logo_url = logo_url
        self.updated_at = datetime.now(UTC)


@catalogue.aggregate
class MatureContent:
    """A content descriptor such as violence or gambling, shown as a warning on the product page."""

    name: String(required=True, max_length=50)
    description: Text()
    logo_url: String(max_length=500)
    is_deleted: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    def update_details(self, name=None, description=None, logo_url=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if logo_url is not None:
            self.logo_url = logo_url
        self.updated_at = datetime.now(UTC)


# Label field of each taxonomy aggregate
LABEL_FIELDS = {Genre: "name", Tag: "title", Mechanic: "name", MatureContent: "name"}
