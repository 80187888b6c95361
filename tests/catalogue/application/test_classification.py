"""Application tests for taxonomy management and product classification."""

import json

import pytest
from catalogue.product.classification import AssignGenres, AssignMatureContents, AssignMechanics, AssignTags
from catalogue.product.creation import CreateGame
from catalogue.product.product import Product
from catalogue.projections.product_card import ProductCard
from catalogue.taxonomy.management import (
    CreateGenre,
    CreateMatureContent,
    CreateMechanic,
    CreateTag,
    DeleteGenre,
    DeleteMatureContent,
    DeleteTag,
    RenameGenre,
    UpdateMatureContent,
    UpdateMechanic,
    live_terms,
)
from catalogue.taxonomy.taxonomy import Genre, MatureContent, Mechanic
from protean import current_domain
from protean.exceptions import ValidationError


def _process(command):
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def game_id():
    return _process(CreateGame(title="Hollow Forge", price=24.99))


class TestTaxonomyManagement:
    def test_labels_are_unique_ignoring_case(self):
        _process(CreateGenre(name="Strategy"))
        with pytest.raises(ValidationError):
            _process(CreateGenre(name=" strategy "))

    def test_labels_are_unique_beyond_the_first_hundred(self):
        for n in range(110):
            _process(CreateTag(title=f"Tag {n}"))
        with pytest.raises(ValidationError):
            _process(CreateTag(title="tag 105"))

    def test_deleted_label_can_be_reused(self):
        genre_id = _process(CreateGenre(name="Strategy"))
        _process(DeleteGenre(genre_id=genre_id))

        _process(CreateGenre(name="Strategy"))

        assert [g.name for g in live_terms(Genre)] == ["Strategy"]

    def test_rename_to_own_label(self):
        genre_id = _process(CreateGenre(name="Puzzle"))
        _process(RenameGenre(genre_id=genre_id, name="PUZZLE"))
        assert current_domain.repository_for(Genre).get(genre_id).name == "PUZZLE"

    def test_rename_to_taken_label(self):
        _process(CreateGenre(name="Puzzle"))
        genre_id = _process(CreateGenre(name="Action"))
        with pytest.raises(ValidationError):
            _process(RenameGenre(genre_id=genre_id, name="Puzzle"))

    def test_update_mechanic(self):
        mechanic_id = _process(CreateMechanic(name="Roguelike"))
        _process(UpdateMechanic(mechanic_id=mechanic_id, description="Permadeath runs"))
        mechanic = current_domain.repository_for(Mechanic).get(mechanic_id)
        assert mechanic.name == "Roguelike"
        assert mechanic.description == "Permadeath runs"


class TestMatureContentManagement:
    def test_create_and_update(self):
        mature_content_id = _process(CreateMatureContent(name="Violence"))
        _process(UpdateMatureContent(mature_content_id=mature_content_id, logo_url="https://cdn.example.com/v.png"))

        violence = current_domain.repository_for(MatureContent).get(mature_content_id)
        assert violence.name == "Violence"
        assert violence.logo_url == "https://cdn.example.com/v.png"

    def test_names_are_unique_ignoring_case(self):
        _process(CreateMatureContent(name="Gambling"))
        with pytest.raises(ValidationError) as exc:
            _process(CreateMatureContent(name="GAMBLING"))
        assert "name" in exc.value.messages

    def test_renaming_onto_a_taken_name(self):
        _process(CreateMatureContent(name="Violence"))
        mature_content_id = _process(CreateMatureContent(name="Gore"))
        with pytest.raises(ValidationError):
            _process(UpdateMatureContent(mature_content_id=mature_content_id, name="violence"))

    def test_deleted_mature_content_is_hidden(self):
        mature_content_id = _process(CreateMatureContent(name="Violence"))
        _process(DeleteMatureContent(mature_content_id=mature_content_id))
        assert live_terms(MatureContent) == []


class TestClassification:
    def test_assign_genres(self, game_id):
        first = _process(CreateGenre(name="Strategy"))
        second = _process(CreateGenre(name="Simulation"))

        _process(AssignGenres(product_id=game_id, genre_ids=json.dumps([first, second])))

        assert current_domain.repository_for(Product).get(game_id).classification_ids("genres") == [first, second]

    def test_assign_tags_and_mechanics(self, game_id):
        tag_id = _process(CreateTag(title="Co-op"))
        mechanic_id = _process(CreateMechanic(name="Crafting"))

        _process(AssignTags(product_id=game_id, tag_ids=json.dumps([tag_id])))
        _process(AssignMechanics(product_id=game_id, mechanic_ids=json.dumps([mechanic_id])))

        product = current_domain.repository_for(Product).get(game_id)
        assert product.classification_ids("tags") == [tag_id]
        assert product.classification_ids("mechanics") == [mechanic_id]

    def test_assign_mature_contents(self, game_id):
        violence = _process(CreateMatureContent(name="Violence"))
        gambling = _process(CreateMatureContent(name="Gambling"))

        _process(AssignMatureContents(product_id=game_id, mature_content_ids=json.dumps([violence, gambling])))

        product = current_domain.repository_for(Product).get(game_id)
        assert product.classification_ids("mature_contents") == [violence, gambling]
        card = current_domain.repository_for(ProductCard).get(game_id)
        assert json.loads(card.mature_content_ids) == [violence, gambling]

    def test_deleted_mature_content_cannot_be_assigned(self, game_id):
        mature_content_id = _process(CreateMatureContent(name="Violence"))
        _process(DeleteMatureContent(mature_content_id=mature_content_id))
        with pytest.raises(ValidationError) as exc:
            _process(AssignMatureContents(product_id=game_id, mature_content_ids=json.dumps([mature_content_id])))
        assert "mature_content_ids" in exc.value.messages

    def test_unknown_term_is_rejected(self, game_id):
        with pytest.raises(ValidationError) as exc:
            _process(AssignGenres(product_id=game_id, genre_ids=json.dumps(["genre-404"])))
        assert "genre_ids" in exc.value.messages

    def test_deleted_term_is_rejected(self, game_id):
        tag_id = _process(CreateTag(title="Retro"))
        _process(DeleteTag(tag_id=tag_id))
        with pytest.raises(ValidationError):
            _process(AssignTags(product_id=game_id, tag_ids=json.dumps([tag_id])))

    def test_empty_list_clears_classification(self, game_id):
        genre_id = _process(CreateGenre(name="Strategy"))
        _process(AssignGenres(product_id=game_id, genre_ids=json.dumps([genre_id])))
        _process(AssignGenres(product_id=game_id, genre_ids=json.dumps([])))
        assert current_domain.repository_for(Product).get(game_id).classification_ids("genres") == []
