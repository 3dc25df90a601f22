"""SQLite-backed document store with an FTS5 mirror of document content."""

import contextlib
import json
import re
import sqlite3
import threading
from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any, Protocol

import structlog

from multisearch.documents.schemas import (
    IndexDocument,
    SearchableId,
    SearchResponse,
    SearchResult,
)
from multisearch.errors import PersistenceError

logger = structlog.get_logger()

_SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    searchable_type TEXT NOT NULL,
    searchable_id NOT NULL,
    language TEXT NOT NULL,
    content TEXT NOT NULL DEFAULT '',
    sort_content TEXT NOT NULL DEFAULT '',
    additional_attributes TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE (searchable_type, searchable_id, language)
);

CREATE VIRTUAL TABLE IF NOT EXISTS documents_fts USING fts5(
    content,
    content='documents',
    content_rowid='id',
    tokenize='porter unicode61'
);

CREATE TRIGGER IF NOT EXISTS documents_ai AFTER INSERT ON documents BEGIN
    INSERT INTO documents_fts (rowid, content) VALUES (new.id, new.content);
END;

CREATE TRIGGER IF NOT EXISTS documents_ad AFTER DELETE ON documents BEGIN
    INSERT INTO documents_fts (documents_fts, rowid, content)
    VALUES ('delete', old.id, old.content);
END;

CREATE TRIGGER IF NOT EXISTS documents_au AFTER UPDATE ON documents BEGIN
    INSERT INTO documents_fts (documents_fts, rowid, content)
    VALUES ('delete', old.id, old.content);
    INSERT INTO documents_fts (rowid, content) VALUES (new.id, new.content);
END;
"""

_UPSERT_SQL = """
INSERT INTO documents (
    searchable_type, searchable_id, language, content, sort_content,
    additional_attributes, created_at, updated_at
)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT (searchable_type, searchable_id, language) DO UPDATE SET
    content = excluded.content,
    sort_content = excluded.sort_content,
    additional_attributes = excluded.additional_attributes,
    updated_at = excluded.updated_at
WHERE content IS NOT excluded.content
    OR sort_content IS NOT excluded.sort_content
    OR additional_attributes IS NOT excluded.additional_attributes
"""

_FIND_SQL = (
    "SELECT * FROM documents "
    "WHERE searchable_type = ? AND searchable_id = ? AND language = ?"
)

# FTS5 special characters that need escaping in queries
_FTS5_SPECIAL = re.compile(r"[\"*(){}[\]^~:\-]")


def _sanitize_query(raw: str) -> str | None:
    """Sanitize user input for FTS5 MATCH safety.

    Strips special characters and prefix-matches the last token so
    partially typed words still hit. Returns None if nothing usable
    remains.

    Args:
        raw: Raw user query string.

    Returns:
        Sanitized FTS5 query string, or None if unusable.
    """
    query = _FTS5_SPECIAL.sub(" ", raw)
    tokens = query.split()
    if not tokens:
        return None

    parts = [f'"{t}"' for t in tokens[:-1]]
    parts.append(f'"{tokens[-1]}"*')
    return " ".join(parts)


def _row_to_document(row: sqlite3.Row) -> IndexDocument:
    return IndexDocument(
        id=row["id"],
        searchable_type=row["searchable_type"],
        searchable_id=row["searchable_id"],
        language=row["language"],
        content=row["content"],
        sort_content=row["sort_content"],
        additional_attributes=json.loads(row["additional_attributes"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class DocumentStore(Protocol):
    """Storage contract the synchronization engine writes through."""

    def find(
        self, searchable_type: str, searchable_id: SearchableId, language: str
    ) -> IndexDocument | None: ...

    def all_for(
        self, searchable_type: str, searchable_id: SearchableId
    ) -> list[IndexDocument]: ...

    def upsert(self, document: IndexDocument) -> IndexDocument: ...

    def destroy(self, document: IndexDocument) -> None: ...

    def destroy_all_for(
        self, searchable_type: str, searchable_id: SearchableId
    ) -> int: ...

    def destroy_all_of_type(self, searchable_type: str) -> int: ...

    def count(self, searchable_type: str | None = None) -> int: ...


class SQLiteDocumentStore:
    """SQLite table of index documents with an FTS5 content mirror.

    Every write runs in its own transaction, so individual upserts and
    deletes are atomic but a batch of them is not. Calls are serialized
    by a reentrant lock; the connection uses check_same_thread=False
    because the event subscriber writes from worker threads.
    """

    def __init__(self, database_path: str = ":memory:") -> None:
        """Initialize document store (call initialize() before use).

        Args:
            database_path: SQLite database file, or ":memory:".
        """
        self._database_path = database_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    def initialize(self) -> None:
        """Open the database and create the documents schema."""
        self._conn = sqlite3.connect(self._database_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()
        logger.info("document_store_initialized", database=self._database_path)

    @contextlib.contextmanager
    def _connection(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Yield the connection under the lock, committing on success.

        Args:
            operation: Name reported in PersistenceError on failure.

        Raises:
            PersistenceError: If the store is closed or SQLite fails.
        """
        with self._lock:
            if self._conn is None:
                raise PersistenceError("document store is not initialized", operation)
            try:
                yield self._conn
                self._conn.commit()
            except sqlite3.Error as exc:
                self._conn.rollback()
                raise PersistenceError(f"{operation} failed: {exc}", operation) from exc

    def find(
        self, searchable_type: str, searchable_id: SearchableId, language: str
    ) -> IndexDocument | None:
        """Look up the document for one record and language.

        Args:
            searchable_type: Type tag of the owning record.
            searchable_id: Identity of the owning record.
            language: Language tag of the document.

        Returns:
            The stored document, or None if absent.
        """
        with self._connection("find") as conn:
            row = conn.execute(
                _FIND_SQL, (searchable_type, searchable_id, language)
            ).fetchone()
        return _row_to_document(row) if row else None

    def all_for(
        self, searchable_type: str, searchable_id: SearchableId
    ) -> list[IndexDocument]:
        """List every document owned by a record, ordered by row id."""
        with self._connection("all_for") as conn:
            rows = conn.execute(
                "SELECT * FROM documents "
                "WHERE searchable_type = ? AND searchable_id = ? ORDER BY id",
                (searchable_type, searchable_id),
            ).fetchall()
        return [_row_to_document(row) for row in rows]

    def upsert(self, document: IndexDocument) -> IndexDocument:
        """Create or update the document for its (type, id, language) key.

        An update that changes no column leaves the row, including
        ``updated_at``, untouched.

        Args:
            document: Document carrying the full attribute set to write.

        Returns:
            The persisted document with id and timestamps populated.

        Raises:
            PersistenceError: If SQLite rejects the write or the
                additional attributes are not JSON-serializable.
        """
        try:
            extra = json.dumps(document.additional_attributes, sort_keys=True)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(
                f"additional attributes are not serializable: {exc}", "upsert"
            ) from exc

        now = datetime.now(UTC).isoformat()
        with self._connection("upsert") as conn:
            conn.execute(
                _UPSERT_SQL,
                (
                    document.searchable_type,
                    document.searchable_id,
                    document.language,
                    document.content,
                    document.sort_content,
                    extra,
                    now,
                    now,
                ),
            )
            row = conn.execute(
                _FIND_SQL,
                (document.searchable_type, document.searchable_id, document.language),
            ).fetchone()

        stored = _row_to_document(row)
        logger.debug(
            "search_document_upserted",
            searchable_type=stored.searchable_type,
            searchable_id=stored.searchable_id,
            language=stored.language,
        )
        return stored

    def destroy(self, document: IndexDocument) -> None:
        """Delete a single document by its key."""
        with self._connection("destroy") as conn:
            conn.execute(
                "DELETE FROM documents "
                "WHERE searchable_type = ? AND searchable_id = ? AND language = ?",
                (document.searchable_type, document.searchable_id, document.language),
            )

        logger.debug(
            "search_document_deleted",
            searchable_type=document.searchable_type,
            searchable_id=document.searchable_id,
            language=document.language,
        )

    def destroy_all_for(
        self, searchable_type: str, searchable_id: SearchableId
    ) -> int:
        """Delete every document owned by a record.

        Returns:
            Number of documents removed.
        """
        with self._connection("destroy_all_for") as conn:
            cursor = conn.execute(
                "DELETE FROM documents WHERE searchable_type = ? AND searchable_id = ?",
                (searchable_type, searchable_id),
            )
        return cursor.rowcount

    def destroy_all_of_type(self, searchable_type: str) -> int:
        """Delete every document of one searchable type.

        Returns:
            Number of documents removed.
        """
        with self._connection("destroy_all_of_type") as conn:
            cursor = conn.execute(
                "DELETE FROM documents WHERE searchable_type = ?", (searchable_type,)
            )
        logger.info(
            "search_documents_purged",
            searchable_type=searchable_type,
            document_count=cursor.rowcount,
        )
        return cursor.rowcount

    def count(self, searchable_type: str | None = None) -> int:
        """Count documents, optionally restricted to one searchable type."""
        with self._connection("count") as conn:
            if searchable_type is None:
                row = conn.execute("SELECT COUNT(*) FROM documents").fetchone()
            else:
                row = conn.execute(
                    "SELECT COUNT(*) FROM documents WHERE searchable_type = ?",
                    (searchable_type,),
                ).fetchone()
        return row[0]

    def search(
        self,
        query: str,
        searchable_type: str | None = None,
        language: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> SearchResponse:
        """Execute a full-text search over document content.

        Args:
            query: Raw user search query.
            searchable_type: Optional filter on the owning record type.
            language: Optional filter on the document language.
            limit: Maximum results to return.
            offset: Number of results to skip.

        Returns:
            SearchResponse with BM25-ordered results and pagination metadata.
        """
        sanitized = _sanitize_query(query)
        if sanitized is None:
            return SearchResponse(
                query=query, results=[], total=0, limit=limit, offset=offset
            )

        where = ["documents_fts MATCH ?"]
        params: list[Any] = [sanitized]
        if searchable_type is not None:
            where.append("d.searchable_type = ?")
            params.append(searchable_type)
        if language is not None:
            where.append("d.language = ?")
            params.append(language)
        where_sql = " AND ".join(where)

        count_sql = (
            "SELECT COUNT(*) FROM documents_fts "
            "JOIN documents d ON d.id = documents_fts.rowid "
            f"WHERE {where_sql}"
        )
        search_sql = (
            "SELECT d.*, "
            "snippet(documents_fts, 0, '<mark>', '</mark>', '...', 32) AS snippet, "
            "bm25(documents_fts) AS score "
            "FROM documents_fts "
            "JOIN documents d ON d.id = documents_fts.rowid "
            f"WHERE {where_sql} "
            "ORDER BY score "
            "LIMIT ? OFFSET ?"
        )

        with self._connection("search") as conn:
            try:
                total = conn.execute(count_sql, params).fetchone()[0]
                rows = conn.execute(search_sql, [*params, limit, offset]).fetchall()
            except sqlite3.OperationalError:
                logger.warning("search_query_failed", query=query)
                return SearchResponse(
                    query=query, results=[], total=0, limit=limit, offset=offset
                )

        results = [
            SearchResult(
                document=_row_to_document(row),
                snippet=row["snippet"] or "",
                score=round(row["score"], 4),
            )
            for row in rows
        ]
        return SearchResponse(
            query=query,
            results=results,
            total=total,
            limit=limit,
            offset=offset,
        )

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("document_store_closed")
