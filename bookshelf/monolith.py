"""The single-process bookstore: seeds sample data and serves pages and the book API."""

from __future__ import annotations

import argparse
import os
from typing import Any, Mapping, Sequence

from bson import ObjectId
from flask import Flask, Response, jsonify
from pymongo import MongoClient

from bookshelf.models import Book
from bookshelf.store import prepare_database
from bookshelf.templates import TemplateRenderer

DATABASE_NAME = "exercise-1"
COLLECTION_NAME = "information"
DEFAULT_URI = "mongodb://localhost:27017"
DEFAULT_PORT = 3030
_CONNECT_TIMEOUT_MS = 10_000
_ZERO_ID = "0" * 24

# In this layout each field is stored under its lower-cased name.
# Pairs are (attribute of Book, document key).
_DOC_KEYS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("book_name", "bookname"),
    ("book_author", "bookauthor"),
    ("book_edition", "bookedition"),
    ("book_pages", "bookpages"),
    ("book_year", "bookyear"),
)

START_DATA: tuple[Book, ...] = (
    Book(
        id="example1",
        book_name="The Vortex",
        book_author="José Eustasio Rivera",
        book_edition="[national-id]-4",
        book_pages="292",
        book_year="1924",
    ),
    Book(
        id="example2",
        book_name="Frankenstein",
        book_author="Mary Shelley",
        book_edition="978-3-649-64609-9",
        book_pages="280",
        book_year="1818",
    ),
    Book(
        id="example3",
        book_name="The Black Cat",
        book_author="Edgar Allan Poe",
        book_edition="978-3-99168-238-7",
        book_pages="280",
        book_year="1843",
    ),
)


def _to_document(book: Book) -> dict[str, str]:
    return {key: getattr(book, attr) for attr, key in _DOC_KEYS}


def _text(document: Mapping[str, Any], key: str) -> str:
    value = document.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _hex_id(value: Any) -> str:
    if value is None:
        return _ZERO_ID
    if isinstance(value, ObjectId):
        return str(value)
    raise ValueError(f"field '_id' must be an ObjectId, got {type(value).__name__}")


def prepare_data(collection: Any) -> None:
    """Insert the sample books that are not stored yet.

    Raises RuntimeError when a sample book is found more than once.
    """
    for book in START_DATA:
        document = _to_document(book)
        found = list(collection.find(dict(document)))
        if len(found) > 1:
            raise RuntimeError("more records were found")
        if not found:
            result = collection.insert_one(dict(document))
            print(f'&{{InsertedID:ObjectID("{result.inserted_id}")}}')
        else:
            for existing in found:
                print(existing)


def find_all_books(collection: Any) -> list[dict[str, str]]:
    """List every book, identified by the hex form of its database id."""
    return [
        {
            "ID": _hex_id(document.get("_id")),
            "BookName": _text(document, "bookname"),
            "BookAuthor": _text(document, "bookauthor"),
            "BookEdition": _text(document, "bookedition"),
            "BookPages": _text(document, "bookpages"),
        }
        for document in collection.find({})
    ]


def create_app(
    collection: Any, renderer: TemplateRenderer, static_dir: str = "css"
) -> Flask:
    """Build the application serving the pages, the stylesheets and the book API."""
    app = Flask(
        "bookstore",
        static_folder=os.path.abspath(static_dir),
        static_url_path="/css",
    )

    def no_content() -> tuple[str, int]:
        return "", 204

    @app.get("/")
    def index() -> str:
        return renderer.render("index", None)

    @app.get("/books")
    def books_page() -> str:
        return renderer.render("book-table", find_all_books(collection))

    @app.get("/authors")
    def authors_page() -> tuple[str, int]:
        return no_content()

    @app.get("/years")
    def years_page() -> tuple[str, int]:
        return no_content()

    @app.get("/search")
    def search_page() -> str:
        return renderer.render("search-bar", None)

    @app.get("/create")
    def create_page() -> tuple[str, int]:
        return no_content()

    @app.get("/api/books")
    def api_books() -> Response:
        return jsonify(find_all_books(collection) or None)

    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Seed the database and run the bookstore server."""
    parser = argparse.ArgumentParser(prog="bookstore", description="Run the bookstore.")
    parser.add_argument("--uri", default=DEFAULT_URI, help="database connection URI")
    parser.add_argument("--views", default="views", help="directory of HTML views")
    parser.add_argument("--static", default="css", help="directory served under /css")
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    client = MongoClient(args.uri, serverSelectionTimeoutMS=_CONNECT_TIMEOUT_MS)
    try:
        collection = prepare_database(client, DATABASE_NAME, COLLECTION_NAME)
        prepare_data(collection)
        renderer = TemplateRenderer(args.views)
        app = create_app(collection, renderer, args.static)
        app.run(host=args.host, port=args.port)
    finally:
        client.close()