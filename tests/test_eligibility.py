"""Eligibility evaluator and option parsing tests."""

import pytest
from pydantic import ValidationError

from multisearch.documents.store import SQLiteDocumentStore
from multisearch.sync.eligibility import (
    evaluate,
    should_have_documents,
    should_update_documents,
)
from multisearch.sync.engine import SyncEngine
from multisearch.sync.options import Inline, MultisearchOptions, Named
from multisearch.sync.record import Multisearchable, predicate


class Event(Multisearchable):
    multisearch_options = MultisearchOptions(
        against=["title"],
        if_=["is_published", lambda record: record.visible],
        unless=[Named(name="is_cancelled")],
        update_if=Inline(fn=lambda record: record.editable),
    )

    def __init__(
        self,
        published: bool = True,
        visible: bool = True,
        cancelled: bool = False,
        editable: bool = True,
    ) -> None:
        self.id = 1
        self.title = "Concert"
        self.published = published
        self.visible = visible
        self.cancelled = cancelled
        self.editable = editable

    @predicate
    def is_published(self) -> bool:
        return self.published

    @predicate
    def is_cancelled(self) -> bool:
        return self.cancelled


class Venue(Multisearchable):
    multisearch_options = MultisearchOptions(against="name")

    def __init__(self) -> None:
        self.id = 1
        self.name = "Hall"


class TaggedVenue(Venue):
    @predicate
    def is_tagged(self) -> bool:
        return True


def test_no_conditions_means_eligible() -> None:
    """A record without conditions should always have documents."""
    assert should_have_documents(Venue())


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({}, True),
        ({"published": False}, False),
        ({"visible": False}, False),
        ({"cancelled": True}, False),
    ],
)
def test_if_and_unless_combine(kwargs: dict[str, bool], expected: bool) -> None:
    """All if conditions must hold and no unless condition may hold."""
    assert should_have_documents(Event(**kwargs)) is expected


def test_inline_and_named_conditions_agree() -> None:
    """A named predicate and an inline function give the same answer."""
    event = Event(published=False)

    assert evaluate(Named(name="is_published"), event) is False
    assert evaluate(Inline(fn=lambda record: record.is_published()), event) is False


def test_evaluation_stops_at_first_false_if() -> None:
    """Later if conditions are not evaluated once one fails."""
    calls: list[str] = []

    class Guarded(Multisearchable):
        multisearch_options = MultisearchOptions(
            against=["title"],
            if_=[
                lambda record: calls.append("first") or False,
                lambda record: calls.append("second") or True,
            ],
        )

        def __init__(self) -> None:
            self.id = 1
            self.title = "x"

    assert not should_have_documents(Guarded())
    assert calls == ["first"]


def test_should_update_false_without_documents(store: SQLiteDocumentStore) -> None:
    """Nothing can be refreshed before a document exists."""
    assert not should_update_documents(Venue(), store)


def test_should_update_true_with_documents(
    engine: SyncEngine, store: SQLiteDocumentStore
) -> None:
    """Existing documents may be refreshed when no update_if is set."""
    engine.on_save(Venue())

    assert should_update_documents(Venue(), store)


def test_should_update_follows_update_if(
    engine: SyncEngine, store: SQLiteDocumentStore
) -> None:
    """update_if decides refresh independently of eligibility."""
    engine.on_save(Event())

    assert should_update_documents(Event(editable=True), store)
    assert not should_update_documents(Event(editable=False), store)
    assert should_have_documents(Event(editable=False))


def test_predicates_are_inherited() -> None:
    """Subclasses see their own and their parents' predicates."""
    assert TaggedVenue._multisearch_predicates == frozenset({"is_tagged"})
    assert Event._multisearch_predicates == frozenset({"is_published", "is_cancelled"})
    assert Venue._multisearch_predicates == frozenset()


def test_single_values_become_lists() -> None:
    """Single conditions and attributes are wrapped in lists."""
    options = MultisearchOptions(against="title", unless="is_hidden")

    assert options.against == ["title"]
    assert options.unless == [Named(name="is_hidden")]


def test_if_accepted_by_alias() -> None:
    """The if option can be passed under its plain name."""
    options = MultisearchOptions.model_validate({"against": ["title"], "if": "ready"})

    assert options.if_ == [Named(name="ready")]


def test_invalid_condition_rejected() -> None:
    """Conditions must be callables or predicate names."""
    with pytest.raises(ValidationError):
        MultisearchOptions(against=["title"], if_=[42])


def test_against_required() -> None:
    """At least one searchable attribute is required."""
    with pytest.raises(ValidationError):
        MultisearchOptions(against=[])
