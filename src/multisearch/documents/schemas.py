"""Pydantic schemas for index documents and search responses."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

SearchableId = int | str

# Bundle keys that map onto IndexDocument columns; anything else is
# carried in additional_attributes.
DOCUMENT_COLUMNS: frozenset[str] = frozenset({"content", "language", "sort_content"})


class IndexDocument(BaseModel):
    """One search document per (searchable type, searchable id, language).

    Attributes:
        id: Store-assigned row id, None until persisted.
        searchable_type: Type tag of the owning record.
        searchable_id: Identity of the owning record.
        language: Language tag this document represents.
        content: Space-joined text of all searchable attributes.
        sort_content: Text of the sortable attribute.
        additional_attributes: Host-supplied extra values, stored verbatim.
        created_at: UTC timestamp of the first write.
        updated_at: UTC timestamp of the latest write.
    """

    id: int | None = None
    searchable_type: str
    searchable_id: SearchableId
    language: str
    content: str = ""
    sort_content: str = ""
    additional_attributes: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def persisted(self) -> bool:
        """Whether the document has been written to the store."""
        return self.id is not None

    def with_attributes(self, attrs: Mapping[str, Any]) -> "IndexDocument":
        """Return a copy with an attribute bundle applied.

        Column keys overwrite the matching fields; every other key
        replaces the additional attributes of the copy.

        Args:
            attrs: Attribute bundle produced by the content extractor.

        Returns:
            New document carrying this document's identity and row id.
        """
        columns = {key: attrs[key] for key in DOCUMENT_COLUMNS if key in attrs}
        extra = {key: value for key, value in attrs.items() if key not in DOCUMENT_COLUMNS}
        return self.model_copy(update={**columns, "additional_attributes": extra})


class SearchResult(BaseModel):
    """Individual search hit with matched snippet.

    Attributes:
        document: The matching index document.
        snippet: Content excerpt with <mark> highlight tags.
        score: BM25 relevance score (lower is better).
    """

    document: IndexDocument
    snippet: str = Field(description="Content excerpt with <mark> highlight tags")
    score: float


class SearchResponse(BaseModel):
    """Paginated search response envelope.

    Attributes:
        query: The original search query string.
        results: List of matched documents.
        total: Total number of matching documents.
        limit: Maximum results per page.
        offset: Number of results skipped.
    """

    query: str
    results: list[SearchResult]
    total: int
    limit: int
    offset: int
