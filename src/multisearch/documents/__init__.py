"""Index document schemas and the SQLite document store."""

from multisearch.documents.schemas import IndexDocument, SearchResponse, SearchResult
from multisearch.documents.store import DocumentStore, SQLiteDocumentStore

__all__ = [
    "DocumentStore",
    "IndexDocument",
    "SQLiteDocumentStore",
    "SearchResponse",
    "SearchResult",
]
