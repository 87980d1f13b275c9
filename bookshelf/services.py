"""The four book micro-services: list, create, update and delete."""

from __future__ import annotations

import argparse
import json
import os
from typing import Any, Callable, Sequence

from flask import Flask, Request, Response, jsonify, request
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from bookshelf.models import Book
from bookshelf.store import (
    BookExistsError,
    BookNotFoundError,
    create_book,
    delete_book,
    find_all_authors,
    find_all_books,
    find_all_years,
    prepare_database,
    update_book,
)

DATABASE_NAME = "exercise-1"
COLLECTION_NAME = "information"
_CONNECT_TIMEOUT_MS = 10_000

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class _BindError(Exception):
    """The request body could not be turned into a book."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def _bind_book(req: Request) -> Book:
    """Read a book from the request body; an empty body gives an empty book."""
    body = req.get_data()
    if not body:
        return Book()
    mimetype = req.mimetype
    if mimetype.startswith("application/json"):
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise _BindError(400, f"Syntax error: {exc}") from exc
        if data is None:
            return Book()
        try:
            return Book.from_json(data)
        except ValueError as exc:
            raise _BindError(400, str(exc)) from exc
    if mimetype in _FORM_TYPES:
        try:
            return Book.from_json(req.form.to_dict())
        except ValueError as exc:
            raise _BindError(400, str(exc)) from exc
    raise _BindError(415, "Unsupported Media Type")


def _json_list(items: list[Any]) -> Response:
    # An empty result goes out as null, which is what clients of the service see.
    return jsonify(items or None)


def connect_collection(uri: str) -> Any:
    """Connect to the database at ``uri`` and return the books collection."""
    client = MongoClient(uri, serverSelectionTimeoutMS=_CONNECT_TIMEOUT_MS)
    return prepare_database(client, DATABASE_NAME, COLLECTION_NAME)


def create_get_app(collection: Any) -> Flask:
    """Build the service that lists books, authors and years."""
    app = Flask("books-get")

    @app.get("/api/books")
    def list_books() -> Response:
        return _json_list(find_all_books(collection))

    @app.get("/api/authors")
    def list_authors() -> Response:
        return _json_list(find_all_authors(collection))

    @app.get("/api/years")
    def list_years() -> Response:
        return _json_list(find_all_years(collection))

    return app


def create_post_app(collection: Any) -> Flask:
    """Build the service that adds new books."""
    app = Flask("books-post")

    @app.post("/api/books")
    def add_book() -> tuple[Response, int]:
        try:
            book = _bind_book(request)
        except _BindError as exc:
            return jsonify({"message": exc.message}), exc.status
        try:
            create_book(collection, book)
        except (BookExistsError, PyMongoError):
            return jsonify({"message": "Internal Server Error"}), 500
        return jsonify({"message": "Book added"}), 201

    return app


def create_put_app(collection: Any) -> Flask:
    """Build the service that updates a book by its ID."""
    app = Flask("books-put")

    @app.put("/api/books/<book_id>")
    def change_book(book_id: str) -> tuple[Response, int]:
        try:
            book = _bind_book(request)
        except _BindError:
            return jsonify({"error": "Invalid JSON"}), 400
        book.id = book_id
        try:
            update_book(collection, book)
        except (BookNotFoundError, PyMongoError) as exc:
            return jsonify({"error": str(exc)}), 404
        return jsonify({"message": "Book updated"}), 200

    return app


def create_delete_app(collection: Any) -> Flask:
    """Build the service that removes a book by its ID."""
    app = Flask("books-delete")

    @app.delete("/api/books/<book_id>")
    def remove_book(book_id: str) -> tuple[Response, int]:
        try:
            delete_book(collection, book_id)
        except BookNotFoundError as exc:
            return jsonify({"error": str(exc)}), 404
        except PyMongoError as exc:
            return jsonify({"error": str(exc)}), 500
        return jsonify({"message": "Book deleted successfully"}), 200

    return app


def _serve(
    label: str,
    port: int,
    factory: Callable[[Any], Flask],
    argv: Sequence[str] | None,
) -> None:
    parser = argparse.ArgumentParser(
        prog=f"books-{label.lower()}",
        description=f"Run the books {label} service.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    parser.add_argument("--port", type=int, default=port, help="port to listen on")
    args = parser.parse_args(argv)

    collection = connect_collection(os.environ.get("DATABASE_URI", ""))
    try:
        app = factory(collection)
        print(f"Books {label} service starting on port {args.port}")
        app.run(host=args.host, port=args.port)
    finally:
        collection.database.client.close()


def main_get(argv: Sequence[str] | None = None) -> None:
    """Run the listing service."""
    _serve("GET", 8081, create_get_app, argv)


def main_post(argv: Sequence[str] | None = None) -> None:
    """Run the creation service."""
    _serve("POST", 8082, create_post_app, argv)


def main_put(argv: Sequence[str] | None = None) -> None:
    """Run the update service."""
    _serve("PUT", 8083, create_put_app, argv)


def main_delete(argv: Sequence[str] | None = None) -> None:
    """Run the deletion service."""
    _serve("DELETE", 8084, create_delete_app, argv)