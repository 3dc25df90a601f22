"""Content extractor tests."""

import pytest

from multisearch.errors import ConfigurationError
from multisearch.sync.extractor import (
    attribute_text,
    document_attributes_for,
    is_blank,
    languages_for,
    searchable_text,
    sort_content,
)
from multisearch.sync.options import Localized, MultisearchOptions, Plain
from multisearch.sync.record import Multisearchable, localized_attribute


class Recipe(Multisearchable):
    multisearch_options = MultisearchOptions(against=["name", "servings", "notes"])

    def __init__(self, name: str, servings: int, notes: str | None = None) -> None:
        self.id = 1
        self.name = name
        self.servings = servings
        self.notes = notes


class Song(Multisearchable):
    multisearch_options = MultisearchOptions(
        against=["title", Plain(name="artist"), "summary"],
        sortable=Localized(name="title"),
        languages=lambda record: ["en", "es"],
        additional_attributes=lambda record: {"artist_id": record.artist_id},
    )

    def __init__(self) -> None:
        self.id = 7
        self.artist = "Ana"
        self.artist_id = 42

    @localized_attribute
    def title(self, language: str) -> str:
        return {"en": "Night", "es": "Noche"}[language]

    def summary(self) -> str:
        return "ballad"


def test_searchable_text_coerces_values() -> None:
    """Non-string values become text and None becomes empty."""
    recipe = Recipe("Soup", 4)

    assert searchable_text(recipe, "en") == "Soup 4 "


def test_sort_content_defaults_to_first_attribute() -> None:
    """Without sortable, sort content comes from the first attribute."""
    assert sort_content(Recipe("Soup", 4), "en") == "Soup"


def test_localized_and_plain_accessors() -> None:
    """Localized attributes receive the language; methods are called bare."""
    song = Song()

    assert searchable_text(song, "en") == "Night Ana ballad"
    assert searchable_text(song, "es") == "Noche Ana ballad"
    assert sort_content(song, "es") == "Noche"


def test_missing_attribute_raises() -> None:
    """Reading an attribute the record lacks raises ConfigurationError."""
    with pytest.raises(ConfigurationError) as exc_info:
        attribute_text(Recipe("Soup", 4), "calories", "en")

    assert exc_info.value.name == "calories"
    assert exc_info.value.record_type == "Recipe"


def test_unregistered_localized_attribute_raises() -> None:
    """An explicit Localized attribute must be registered on the class."""
    with pytest.raises(ConfigurationError):
        attribute_text(Recipe("Soup", 4), Localized(name="name"), "en")


def test_languages_default_to_default_language() -> None:
    """Records without a languages callable use the default language."""
    assert languages_for(Recipe("Soup", 4), "de") == ["de"]
    assert languages_for(Song(), "de") == ["en", "es"]


def test_document_attributes_per_language() -> None:
    """One bundle per language, with additional attributes merged in."""
    bundles = document_attributes_for(Song(), "en")

    assert bundles == [
        {
            "content": "Night Ana ballad",
            "language": "en",
            "sort_content": "Night",
            "artist_id": 42,
        },
        {
            "content": "Noche Ana ballad",
            "language": "es",
            "sort_content": "Noche",
            "artist_id": 42,
        },
    ]


@pytest.mark.parametrize("value", [None, "", "   ", "\n\t"])
def test_is_blank(value: str | None) -> None:
    """Empty and whitespace-only values are blank."""
    assert is_blank(value)


def test_is_not_blank() -> None:
    """Any visible character makes a value non-blank."""
    assert not is_blank(" x ")
    assert not is_blank(0)


class Untranslated(Multisearchable):
    multisearch_options = MultisearchOptions(
        against=["name"], languages=lambda record: record.languages
    )

    def __init__(self, languages: list[str] | None) -> None:
        self.id = 3
        self.name = "Pending"
        self.languages = languages


def test_languages_callable_returning_none_uses_default() -> None:
    """A languages callable returning None falls back to the default."""
    assert languages_for(Untranslated(None), "en") == ["en"]
    assert languages_for(Untranslated([]), "en") == []


class Broken(Multisearchable):
    multisearch_options = MultisearchOptions(against=["headline"])

    def __init__(self) -> None:
        self.id = 5

    @property
    def headline(self) -> str:
        return self.author.upper()


def test_attribute_error_inside_property_propagates() -> None:
    """A property that fails internally keeps its own AttributeError."""
    with pytest.raises(AttributeError, match="author"):
        attribute_text(Broken(), "headline", "en")
