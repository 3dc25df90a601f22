"""Base class for host records mirrored into index documents.

Subclasses set ``multisearch_options`` and may register predicate methods
(for ``Named`` conditions) and language-aware accessors (for ``Localized``
attributes) with the decorators below. Registration happens once, when
the subclass is defined, and lookups only consult those tables.
"""
from collections.abc import Callable
from typing import Any, ClassVar, TypeVar

from multisearch.documents.schemas import SearchableId
from multisearch.errors import ConfigurationError
from multisearch.sync.options import MultisearchOptions

F = TypeVar("F", bound=Callable[..., Any])

_PREDICATE_MARKER = "__multisearch_predicate__"
_LOCALIZED_MARKER = "__multisearch_localized__"


def predicate(fn: F) -> F:
    """Register a zero-argument method as a named multisearch condition."""
    setattr(fn, _PREDICATE_MARKER, True)
    return fn


def localized_attribute(fn: F) -> F:
    """Register a ``(self, language)`` method as a language-aware attribute."""
    setattr(fn, _LOCALIZED_MARKER, True)
    return fn


class Multisearchable:
    """Mixin for records whose content is kept in the document store.

    Attributes:
        multisearch_options: Class-level options; required on subclasses.
    """

    multisearch_options: ClassVar[MultisearchOptions]

    _multisearch_predicates: ClassVar[frozenset[str]] = frozenset()
    _multisearch_localized: ClassVar[frozenset[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        predicates = set(cls._multisearch_predicates)
        localized = set(cls._multisearch_localized)
        for name, member in vars(cls).items():
            if getattr(member, _PREDICATE_MARKER, False):
                predicates.add(name)
            if getattr(member, _LOCALIZED_MARKER, False):
                localized.add(name)
        cls._multisearch_predicates = frozenset(predicates)
        cls._multisearch_localized = frozenset(localized)

    @classmethod
    def searchable_type(cls) -> str:
        """Type tag stored on this record's documents."""
        return cls.__name__

    @classmethod
    def get_multisearch_options(cls) -> MultisearchOptions:
        """Return the class options.

        Raises:
            ConfigurationError: If the class declares no options.
        """
        options = getattr(cls, "multisearch_options", None)
        if not isinstance(options, MultisearchOptions):
            raise ConfigurationError(
                f"{cls.__name__} does not declare multisearch_options",
                cls.searchable_type(),
            )
        return options

    @property
    def searchable_id(self) -> SearchableId:
        """Stable identity of the record, read from its ``id`` attribute.

        Raises:
            ConfigurationError: If the record has no ``id``.
        """
        value = getattr(self, "id", None)
        if value is None:
            raise ConfigurationError(
                f"{type(self).__name__} has no id to index under",
                self.searchable_type(),
                "id",
            )
        return value

    def multisearch_predicate(self, name: str) -> Callable[[], Any]:
        """Return the bound predicate registered under ``name``.

        Raises:
            ConfigurationError: If no predicate of that name is registered.
        """
        if name not in self._multisearch_predicates:
            raise ConfigurationError(
                f"{type(self).__name__} has no predicate named {name!r}",
                self.searchable_type(),
                name,
            )
        return getattr(self, name)

    def has_localized_attribute(self, name: str) -> bool:
        """Whether a language-aware accessor is registered under ``name``."""
        return name in self._multisearch_localized

    def localized_accessor(self, name: str) -> Callable[[str], Any]:
        """Return the bound language-aware accessor registered under ``name``.

        Raises:
            ConfigurationError: If no accessor of that name is registered.
        """
        if name not in self._multisearch_localized:
            raise ConfigurationError(
                f"{type(self).__name__} has no localized attribute {name!r}",
                self.searchable_type(),
                name,
            )
        return getattr(self, name)
