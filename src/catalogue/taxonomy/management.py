"""Taxonomy management — commands and handlers for every kind of taxonomy term.

Labels are unique per kind among non-deleted terms, compared
case-insensitively.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.taxonomy.taxonomy import LABEL_FIELDS, Genre, MatureContent, Mechanic, Tag, soft_delete

logger = structlog.get_logger(__name__)


def live_terms(cls):
    return current_domain.repository_for(cls)._dao.query.filter(is_deleted=False).limit(None).all().items


def _ensure_unique_label(cls, label, exclude_id=None):
    field = LABEL_FIELDS[cls]
    for term in live_terms(cls):
        if str(term.id) == str(exclude_id):
            continue
        if getattr(term, field).strip().lower() == label.strip().lower():
            raise ValidationError({field: [f"{cls.__name__} '{label}' already exists"]})


def _create(cls, **fields):
    _ensure_unique_label(cls, fields[LABEL_FIELDS[cls]])
    now = datetime.now(UTC)
    term = cls(**fields, created_at=now, updated_at=now)
    current_domain.repository_for(cls).add(term)
    logger.info("Taxonomy term created", kind=cls.__name__, term_id=str(term.id))
    return str(term.id)


def _delete(cls, term_id):
    repo = current_domain.repository_for(cls)
    term = repo.get(term_id)
    soft_delete(term)
    repo.add(term)


# ---------------------------------------------------------------------------
# Genres
# ---------------------------------------------------------------------------
@catalogue.command(part_of="Genre")
class CreateGenre:
    name: String(required=True, max_length=100)


@catalogue.command(part_of="Genre")
class RenameGenre:
    genre_id: Identifier(required=True)
    name: String(required=True, max_length=100)


@catalogue.command(part_of="Genre")
class DeleteGenre:
    genre_id: Identifier(required=True)


@catalogue.command_handler(part_of=Genre)
class ManageGenreHandler:
    @handle(CreateGenre)
    def create_genre(self, command):
        return _create(Genre, name=command.name)

    @handle(RenameGenre)
    def rename_genre(self, command):
        _ensure_unique_label(Genre, command.name, exclude_id=command.genre_id)
        repo = current_domain.repository_for(Genre)
        genre = repo.get(command.genre_id)
        genre.rename(command.name)
        repo.add(genre)

    @handle(DeleteGenre)
    def delete_genre(self, command):
        _delete(Genre, command.genre_id)


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------
@catalogue.command(part_of="Tag")
class CreateTag:
    title: String(required=True, max_length=100)


@catalogue.command(part_of="Tag")
class RenameTag:
    tag_id: Identifier(required=True)
    title: String(required=True, max_length=100)


@catalogue.command(part_of="Tag")
class DeleteTag:
    tag_id: Identifier(required=True)


@catalogue.command_handler(part_of=Tag)
class ManageTagHandler:
    @handle(CreateTag)
    def create_tag(self, command):
        return _create(Tag, title=command.title)

    @handle(RenameTag)
    def rename_tag(self, command):
        _ensure_unique_label(Tag, command.title, exclude_id=command.tag_id)
        repo = current_domain.repository_for(Tag)
        tag = repo.get(command.tag_id)
        tag.rename(command.title)
        repo.add(tag)

    @handle(DeleteTag)
    def delete_tag(self, command):
        _delete(Tag, command.tag_id)


# ---------------------------------------------------------------------------
# Mechanics
# ---------------------------------------------------------------------------
@catalogue.command(part_of="Mechanic")
class CreateMechanic:
    name: String(required=True, max_length=100)
    description: Text()
    logo_url: String(max_length=500)


@catalogue.command(part_of="Mechanic")
class UpdateMechanic:
    mechanic_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    logo_url: String(max_length=500)


@catalogue.command(part_of="Mechanic")
class DeleteMechanic:
    mechanic_id: Identifier(required=True)


@catalogue.command_handler(part_of=Mechanic)
class ManageMechanicHandler:
    @handle(CreateMechanic)
    def create_mechanic(self, command):
        return _create(
            Mechanic,
            name=command.name,
            description=command.description,
            logo_url=command.logo_url,
        )

    @handle(UpdateMechanic)
    def update_mechanic(self, command):
        if command.name is not None:
            _ensure_unique_label(Mechanic, command.name, exclude_id=command.mechanic_id)
        repo = current_domain.repository_for(Mechanic)
        mechanic = repo.get(command.mechanic_id)
        mechanic.update_details(
            name=command.name,
            description=command.description,
            logo_url=command.logo_url,
        )
        repo.add(mechanic)

    @handle(DeleteMechanic)
    def delete_mechanic(self, command):
        _delete(Mechanic, command.mechanic_id)


# ---------------------------------------------------------------------------
# Mature content
# ---------------------------------------------------------------------------
@catalogue.command(part_of="MatureContent")
class CreateMatureContent:
    name: String(required=True, max_length=50)
    description: Text()
    logo_url: String(max_length=500)


@catalogue.command(part_of="MatureContent")
class UpdateMatureContent:
    mature_content_id: Identifier(required=True)
    name: String(max_length=50)
    description: Text()
    logo_url: String(max_length=500)


@catalogue.command(part_of="MatureContent")
class DeleteMatureContent:
    mature_content_id: Identifier(required=True)


@catalogue.command_handler(part_of=MatureContent)
class ManageMatureContentHandler:
    @handle(CreateMatureContent)
    def create_mature_content(self, command):
        return _create(
            MatureContent,
            name=command.name,
            description=command.description,
            logo_url=command.logo_url,
        )

    @handle(UpdateMatureContent)
    def update_mature_content(self, command):
        if command.name is not None:
            _ensure_unique_label(MatureContent, command.name, exclude_id=command.mature_content_id)
        repo = current_domain.repository_for(MatureContent)
        mature_content = repo.get(command.mature_content_id)
        mature_content.update_details(
            name=command.name,
            description=command.description,
            logo_url=command.logo_url,
        )
        repo.add(mature_content)

    @handle(DeleteMatureContent)
    def delete_mature_content(self, command):
        _delete(MatureContent, command.mature_content_id)
