"""Declarative multisearch options attached to a record class."""
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Inline(BaseModel):
    """Condition evaluated by calling a function with the record."""

    model_config = ConfigDict(frozen=True)

    fn: Callable[[Any], Any]


class Named(BaseModel):
    """Condition evaluated by calling a registered predicate method."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)


class Plain(BaseModel):
    """Attribute read from the record without a language."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)


class Localized(BaseModel):
    """Attribute read through a registered language-aware accessor."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)


Condition = Inline | Named
Attribute = str | Plain | Localized


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _coerce_condition(value: Any) -> Any:
    if isinstance(value, (Inline, Named)):
        return value
    if isinstance(value, str):
        return Named(name=value)
    if callable(value):
        return Inline(fn=value)
    raise ValueError(f"condition must be a callable or predicate name, got {value!r}")


class MultisearchOptions(BaseModel):
    """Options describing how a record is mirrored into index documents.

    Conditions accept Inline/Named instances, plain callables (taking the
    record) or predicate names. A single value is treated as a one-item
    list.

    Attributes:
        against: Attributes joined into document content, in order.
        sortable: Attribute used for sort content, defaults to against[0].
        languages: Callable returning the record's language tags.
        additional_attributes: Callable returning extra document values.
        if_: Conditions that must all hold for documents to exist.
        unless: Conditions of which none may hold for documents to exist.
        update_if: Conditions that must all hold to refresh documents.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    against: list[Attribute] = Field(min_length=1)
    sortable: Attribute | None = None
    languages: Callable[[Any], Sequence[str]] | None = None
    additional_attributes: Callable[[Any], Mapping[str, Any]] | None = None
    if_: list[Condition] = Field(default_factory=list, alias="if")
    unless: list[Condition] = Field(default_factory=list)
    update_if: list[Condition] = Field(default_factory=list)

    @field_validator("against", mode="before")
    @classmethod
    def _listify_against(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @field_validator("if_", "unless", "update_if", mode="before")
    @classmethod
    def _coerce_conditions(cls, value: Any) -> list[Any]:
        return [_coerce_condition(item) for item in _as_list(value)]

    @property
    def sort_attribute(self) -> Attribute:
        """Attribute whose text becomes the document's sort content."""
        return self.sortable if self.sortable is not None else self.against[0]
