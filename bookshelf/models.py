"""The book record shared by the services, the database and the web front-end."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

# (attribute, document key, JSON key)
_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("id", "id", "ID"),
    ("book_name", "book_name", "BookName"),
    ("book_author", "book_author", "BookAuthor"),
    ("book_edition", "book_edition", "BookEdition"),
    ("book_pages", "book_pages", "BookPages"),
    ("book_year", "book_year", "BookYear"),
)


def _as_text(value: Any, key: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


@dataclass
class Book:
    """A book as stored in the collection and exchanged over the API."""

    id: str = ""
    book_name: str = ""
    book_author: str = ""
    book_edition: str = ""
    book_pages: str = ""
    book_year: str = ""
    mongo_id: Any = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Book":
        """Build a book from a database document."""
        values = {
            attr: _as_text(document.get(doc_key), doc_key)
            for attr, doc_key, _ in _FIELDS
        }
        return cls(mongo_id=document.get("_id"), **values)

    def to_document(self) -> dict[str, Any]:
        """Return the database document; the internal id is left out when unset."""
        document: dict[str, Any] = {}
        if self.mongo_id is not None:
            document["_id"] = self.mongo_id
        for attr, doc_key, _ in _FIELDS:
            document[doc_key] = getattr(self, attr)
        return document

    @classmethod
    def from_json(cls, data: Any) -> "Book":
        """Build a book from decoded JSON; keys match without regard to case."""
        if not isinstance(data, Mapping):
            raise ValueError("book JSON must be an object")
        lowered: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(key, str):
                lowered.setdefault(key.lower(), value)
        values = {
            attr: _as_text(lowered.get(json_key.lower()), json_key)
            for attr, _, json_key in _FIELDS
        }
        return cls(**values)

    def to_json(self) -> dict[str, str]:
        """Return the JSON form of the book; the internal id is never included."""
        return {json_key: getattr(self, attr) for attr, _, json_key in _FIELDS}