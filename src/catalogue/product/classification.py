"""Product classification — assigning genres, tags, mechanics and mature contents."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.taxonomy.taxonomy import Genre, MatureContent, Mechanic, Tag


@catalogue.command(part_of="Product")
class AssignGenres:
    product_id: Identifier(required=True)
    genre_ids: Text(required=True)  # JSON: list of genre ids


@catalogue.command(part_of="Product")
class AssignTags:
    product_id: Identifier(required=True)
    tag_ids: Text(required=True)  # JSON: list of tag ids


@catalogue.command(part_of="Product")
class AssignMechanics:
    product_id: Identifier(required=True)
    mechanic_ids: Text(required=True)  # JSON: list of mechanic ids


@catalogue.command(part_of="Product")
class AssignMatureContents:
    product_id: Identifier(required=True)
    mature_content_ids: Text(required=True)  # JSON: list of mature content ids


def _existing_ids(cls, raw_ids, field):
    ids = json.loads(raw_ids) if isinstance(raw_ids, str) else list(raw_ids or [])
    repo = current_domain.repository_for(cls)
    for term_id in ids:
        try:
            term = repo.get(str(term_id))
        except ObjectNotFoundError:
            raise ValidationError({field: [f"{cls.__name__} {term_id} does not exist"]}) from None
        if term.is_deleted:
            raise ValidationError({field: [f"{cls.__name__} {term_id} has been deleted"]})
    return ids


@catalogue.command_handler(part_of=Product)
class ClassifyProductHandler:
    @handle(AssignGenres)
    def assign_genres(self, command):
        self._classify(command.product_id, "genres", _existing_ids(Genre, command.genre_ids, "genre_ids"))

    @handle(AssignTags)
    def assign_tags(self, command):
        self._classify(command.product_id, "tags", _existing_ids(Tag, command.tag_ids, "tag_ids"))

    @handle(AssignMechanics)
    def assign_mechanics(self, command):
        self._classify(command.product_id, "mechanics", _existing_ids(Mechanic, command.mechanic_ids, "mechanic_ids"))

    @handle(AssignMatureContents)
    def assign_mature_contents(self, command):
        ids = _existing_ids(MatureContent, command.mature_content_ids, "mature_content_ids")
        self._classify(command.product_id, "mature_contents", ids)

    def _classify(self, product_id, classification, ids):
        repo = current_domain.repository_for(Product)
        product = repo.get(product_id)
        product.classify(classification, ids)
        repo.add(product)
