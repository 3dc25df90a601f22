"""Exception types raised by the synchronization engine and document store."""


class MultisearchError(Exception):
    """Base class for multisearch failures."""


class ConfigurationError(MultisearchError):
    """Raised when record options cannot be resolved against a record."""

    def __init__(
        self, message: str, record_type: str, name: str | None = None
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error description.
            record_type: Searchable type of the offending record.
            name: Attribute or predicate name that failed to resolve.
        """
        super().__init__(message)
        self.record_type = record_type
        self.name = name


class PersistenceError(MultisearchError):
    """Raised when the document store rejects a write or delete."""

    def __init__(self, message: str, operation: str) -> None:
        """Initialize persistence error.

        Args:
            message: Error description.
            operation: Store operation that failed (e.g., "upsert").
        """
        super().__init__(message)
        self.operation = operation
