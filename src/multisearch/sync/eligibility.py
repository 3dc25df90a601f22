"""Eligibility decisions for creating and refreshing a record's documents."""
from multisearch.documents.store import DocumentStore
from multisearch.sync.options import Condition, Inline
from multisearch.sync.record import Multisearchable


def evaluate(condition: Condition, record: Multisearchable) -> bool:
    """Evaluate one condition against a record.

    Inline conditions are called with the record; Named conditions call
    the record's registered predicate of that name.

    Raises:
        ConfigurationError: If a Named condition is not registered.
    """
    if isinstance(condition, Inline):
        return bool(condition.fn(record))
    return bool(record.multisearch_predicate(condition.name)())


def should_have_documents(record: Multisearchable) -> bool:
    """Whether the record should currently have any documents.

    True when every ``if`` condition holds and no ``unless`` condition
    holds. Evaluation stops at the first deciding condition.
    """
    options = record.get_multisearch_options()
    return all(evaluate(c, record) for c in options.if_) and not any(
        evaluate(c, record) for c in options.unless
    )


def should_update_documents(record: Multisearchable, store: DocumentStore) -> bool:
    """Whether the record's existing documents may be overwritten.

    False when the record has no documents yet; otherwise true when every
    ``update_if`` condition holds.
    """
    if not store.all_for(record.searchable_type(), record.searchable_id):
        return False
    options = record.get_multisearch_options()
    return all(evaluate(c, record) for c in options.update_if)
