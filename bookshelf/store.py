"""Operations on the books collection."""

from __future__ import annotations

import dataclasses
from typing import Any

from bookshelf.models import Book


class BookNotFoundError(LookupError):
    """No book with the requested ID exists."""

    def __init__(self, book_id: str, message: str | None = None) -> None:
        self.book_id = book_id
        super().__init__(message or f"book with ID {book_id} not found")


class BookExistsError(ValueError):
    """A book with the given ID is already stored."""

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"book with ID {book_id} already exists")


def prepare_database(client: Any, db_name: str, collection_name: str) -> Any:
    """Return the named collection, creating it first when it does not exist."""
    db = client[db_name]
    if collection_name not in db.list_collection_names():
        db.command("create", collection_name)
    return db[collection_name]


def _all_books(collection: Any) -> list[Book]:
    return [Book.from_document(document) for document in collection.find({})]


def find_all_books(collection: Any) -> list[dict[str, str]]:
    """List every book as a summary without its year."""
    return [
        {
            "ID": book.id,
            "BookName": book.book_name,
            "BookAuthor": book.book_author,
            "BookEdition": book.book_edition,
            "BookPages": book.book_pages,
        }
        for book in _all_books(collection)
    ]


def find_all_authors(collection: Any) -> list[str]:
    """List the author of every book, in storage order."""
    return [book.book_author for book in _all_books(collection)]


def find_all_years(collection: Any) -> list[str]:
    """List the year of every book, in storage order."""
    return [book.book_year for book in _all_books(collection)]


def create_book(collection: Any, book: Book) -> None:
    """Insert a new book; raise BookExistsError if its ID is taken."""
    if collection.find_one({"id": book.id}) is not None:
        raise BookExistsError(book.id)
    collection.insert_one(dataclasses.replace(book, mongo_id=None).to_document())


def update_book(collection: Any, book: Book) -> None:
    """Overwrite the fields of the book with the same ID."""
    update = {
        "$set": {
            "book_name": book.book_name,
            "book_author": book.book_author,
            "book_edition": book.book_edition,
            "book_pages": book.book_pages,
            "book_year": book.book_year,
        }
    }
    result = collection.update_one({"id": book.id}, update)
    if result.matched_count == 0:
        raise BookNotFoundError(book.id, f"no book found with ID '{book.id}'")


def delete_book(collection: Any, book_id: str) -> None:
    """Remove the book with the given ID."""
    result = collection.delete_one({"id": book_id})
    if result.deleted_count == 0:
        raise BookNotFoundError(book_id)