"""Content extraction from records into per-language attribute bundles."""
import inspect
from typing import Any

from multisearch.errors import ConfigurationError
from multisearch.sync.options import Attribute, Localized, Plain
from multisearch.sync.record import Multisearchable

DocumentAttributes = dict[str, Any]


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def is_blank(value: Any) -> bool:
    """Whether a value is None, empty, or whitespace only."""
    return not _to_text(value).strip()


def _defines(record: Multisearchable, name: str) -> bool:
    # Declared on the class or set on the instance
    return hasattr(type(record), name) or name in getattr(record, "__dict__", {})


def resolve_attribute(record: Multisearchable, attribute: Attribute) -> Plain | Localized:
    """Resolve a configured attribute to its accessor variant.

    Bare names become Localized when the record class registered a
    language-aware accessor under that name, and Plain otherwise.
    """
    if isinstance(attribute, (Plain, Localized)):
        return attribute
    if record.has_localized_attribute(attribute):
        return Localized(name=attribute)
    return Plain(name=attribute)


def attribute_text(record: Multisearchable, attribute: Attribute, language: str) -> str:
    """Compute one attribute's text for a language.

    Args:
        record: Record to read from.
        attribute: Configured attribute name or accessor variant.
        language: Language tag passed to localized accessors.

    Returns:
        The attribute value as text; None becomes an empty string.

    Raises:
        ConfigurationError: If the attribute cannot be resolved.
    """
    resolved = resolve_attribute(record, attribute)
    if isinstance(resolved, Localized):
        return _to_text(record.localized_accessor(resolved.name)(language))

    try:
        value = getattr(record, resolved.name)
    except AttributeError as exc:
        if _defines(record, resolved.name):
            raise
        raise ConfigurationError(
            f"{type(record).__name__} has no attribute {resolved.name!r}",
            record.searchable_type(),
            resolved.name,
        ) from exc
    if inspect.ismethod(value):
        value = value()
    return _to_text(value)


def searchable_text(record: Multisearchable, language: str) -> str:
    """Join the text of every ``against`` attribute with single spaces."""
    options = record.get_multisearch_options()
    return " ".join(attribute_text(record, attr, language) for attr in options.against)


def sort_content(record: Multisearchable, language: str) -> str:
    """Text of the sortable attribute, or of the first ``against`` entry."""
    options = record.get_multisearch_options()
    return attribute_text(record, options.sort_attribute, language)


def languages_for(record: Multisearchable, default_language: str) -> list[str]:
    """Language tags the record should have documents in.

    Args:
        record: Record to inspect.
        default_language: Used when the record declares no languages.

    Returns:
        Result of the configured ``languages`` callable, in order, or a
        single-item list holding ``default_language`` when there is no
        callable or it returns None.
    """
    options = record.get_multisearch_options()
    if options.languages is None:
        return [default_language]
    languages = options.languages(record)
    if languages is None:
        return [default_language]
    return list(languages)


def document_attributes_for(
    record: Multisearchable, default_language: str
) -> list[DocumentAttributes]:
    """Build one attribute bundle per language.

    Each bundle holds ``content``, ``language`` and ``sort_content``, with
    the configured additional attributes merged over it (extra keys win).
    """
    options = record.get_multisearch_options()
    bundles: list[DocumentAttributes] = []
    for language in languages_for(record, default_language):
        attrs: DocumentAttributes = {
            "content": searchable_text(record, language),
            "language": language,
            "sort_content": sort_content(record, language),
        }
        if options.additional_attributes is not None:
            attrs.update(options.additional_attributes(record))
        bundles.append(attrs)
    return bundles
