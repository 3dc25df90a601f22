"""Multisearch configuration loaded from environment variables."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Multisearch configuration loaded from environment variables.

    Attributes:
        enabled: Initial state of the synchronization toggle.
        default_language: Language tag used when a record declares none.
        database_path: SQLite database file backing the document store.
        debug: Enable debug-level logging.
        event_queue_size: Maximum size of each subscriber queue.
        event_max_subscribers: Maximum number of concurrent subscribers.
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTISEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = True
    default_language: str = "en"
    database_path: str = ":memory:"
    debug: bool = False

    event_queue_size: int = 100
    event_max_subscribers: int = 100
