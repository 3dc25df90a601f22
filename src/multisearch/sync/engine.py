"""Synchronization engine keeping index documents in step with records."""
from collections.abc import Iterable

import structlog
from pydantic import BaseModel, ConfigDict

from multisearch.config import Settings
from multisearch.documents.schemas import IndexDocument
from multisearch.documents.store import DocumentStore
from multisearch.errors import ConfigurationError
from multisearch.sync.eligibility import should_have_documents, should_update_documents
from multisearch.sync.extractor import document_attributes_for, is_blank
from multisearch.sync.record import Multisearchable

logger = structlog.get_logger()


class SyncContext(BaseModel):
    """Per-event switches read when a record event is handled.

    Attributes:
        enabled: Whether saves synchronize documents at all.
        default_language: Language used for records declaring none.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    default_language: str = "en"

    @classmethod
    def from_settings(cls, settings: Settings) -> "SyncContext":
        """Build a context from loaded settings."""
        return cls(enabled=settings.enabled, default_language=settings.default_language)


class SyncEngine:
    """Creates, refreshes and removes a record's documents on lifecycle events.

    The host calls ``on_save`` after every create or update and
    ``on_destroy`` after a delete. Each call runs to completion in the
    caller's thread. Store and configuration errors propagate unchanged;
    documents written earlier in the same call stay written.

    Attributes:
        context: Default context used when a call passes none. Replacing
            it affects the next event, never one already running.
    """

    def __init__(self, store: DocumentStore, context: SyncContext | None = None) -> None:
        """Initialize engine.

        Args:
            store: Document store written through.
            context: Default context, enabled with language "en" if None.
        """
        self._store = store
        self.context = context or SyncContext()

    @property
    def store(self) -> DocumentStore:
        """Document store this engine writes to."""
        return self._store

    def on_save(self, record: Multisearchable, context: SyncContext | None = None) -> None:
        """Reconcile a record's documents after it was created or updated.

        Args:
            record: The saved record.
            context: Context for this event, defaults to ``self.context``.
        """
        ctx = context if context is not None else self.context
        if not ctx.enabled:
            logger.debug("multisearch_disabled", searchable_type=record.searchable_type())
            return
        self._synchronize(record, ctx)

    def on_destroy(self, record: Multisearchable) -> None:
        """Remove every document of a destroyed record.

        Runs regardless of the context toggle and the record's conditions.
        """
        self._clear(record)

    def rebuild(
        self,
        searchable_type: str,
        records: Iterable[Multisearchable],
        clean_up: bool = True,
    ) -> int:
        """Resynchronize every document of one searchable type.

        Runs even when the context is disabled. With ``clean_up`` all
        existing documents of the type are deleted first, which also
        drops documents for languages a record no longer returns.

        Args:
            searchable_type: Type tag being rebuilt.
            records: All records of that type.
            clean_up: Delete the type's documents before resyncing.

        Returns:
            Number of documents of the type after the rebuild.

        Raises:
            ConfigurationError: If a record belongs to another type.
        """
        if clean_up:
            self._store.destroy_all_of_type(searchable_type)

        for record in records:
            if record.searchable_type() != searchable_type:
                raise ConfigurationError(
                    f"cannot rebuild {searchable_type} with a "
                    f"{record.searchable_type()} record",
                    record.searchable_type(),
                )
            self._synchronize(record, self.context)

        count = self._store.count(searchable_type)
        logger.info(
            "search_documents_rebuilt",
            searchable_type=searchable_type,
            document_count=count,
        )
        return count

    def _synchronize(self, record: Multisearchable, ctx: SyncContext) -> None:
        if should_have_documents(record):
            self._create_or_update(record, ctx.default_language)
        else:
            self._clear(record)

    def _create_or_update(self, record: Multisearchable, default_language: str) -> None:
        searchable_type = record.searchable_type()
        searchable_id = record.searchable_id

        for attrs in document_attributes_for(record, default_language):
            language = attrs["language"]
            document = self._store.find(searchable_type, searchable_id, language)

            if is_blank(attrs["content"]):
                if document is not None:
                    self._store.destroy(document)
                continue

            if (
                document is not None
                and document.persisted
                and not should_update_documents(record, self._store)
            ):
                logger.debug(
                    "search_document_frozen",
                    searchable_type=searchable_type,
                    searchable_id=searchable_id,
                    language=language,
                )
                continue

            if document is None:
                document = IndexDocument(
                    searchable_type=searchable_type,
                    searchable_id=searchable_id,
                    language=language,
                )
            self._store.upsert(document.with_attributes(attrs))

    def _clear(self, record: Multisearchable) -> None:
        removed = self._store.destroy_all_for(record.searchable_type(), record.searchable_id)
        logger.debug(
            "search_documents_cleared",
            searchable_type=record.searchable_type(),
            searchable_id=record.searchable_id,
            document_count=removed,
        )
