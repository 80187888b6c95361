"""Tests for the Genre, Tag, Mechanic and MatureContent aggregates."""

import pytest
from catalogue.taxonomy.taxonomy import Genre, MatureContent, Mechanic, Tag, soft_delete
from protean.exceptions import ValidationError


class TestTaxonomy:
    def test_rename_genre(self):
        genre = Genre(name="Strategy")
        genre.rename("Grand Strategy")
        assert genre.name == "Grand Strategy"
        assert genre.updated_at is not None

    def test_tag_title_is_required(self):
        with pytest.raises(ValidationError):
            Tag()

    def test_mechanic_partial_update(self):
        mechanic = Mechanic(name="Deck building", description="Build a deck as you play")
        mechanic.update_details(logo_url="https://cdn.example.com/deck.png")
        assert mechanic.name == "Deck building"
        assert mechanic.description == "Build a deck as you play"
        assert mechanic.logo_url == "https://cdn.example.com/deck.png"

    def test_mature_content_name_is_short(self):
        with pytest.raises(ValidationError) as exc:
            MatureContent(name="x" * 51)
        assert "name" in exc.value.messages

    def test_mature_content_update(self):
        violence = MatureContent(name="Violence")
        violence.update_details(description="Realistic blood and gore")
        assert violence.name == "Violence"
        assert violence.description == "Realistic blood and gore"

    def test_soft_delete(self):
        tag = Tag(title="Co-op")
        soft_delete(tag)
        assert tag.is_deleted

    def test_soft_delete_twice(self):
        genre = Genre(name="Puzzle")
        soft_delete(genre)
        with pytest.raises(ValidationError) as exc:
            soft_delete(genre)
        assert "Genre" in str(exc.value.messages)
