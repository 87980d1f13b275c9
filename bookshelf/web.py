"""The web front-end: renders pages from data fetched from the listing service."""

from __future__ import annotations

import argparse
import json
import os
from typing import Any, Sequence

import requests
from flask import Flask, Response, request

from bookshelf.models import Book
from bookshelf.templates import TemplateRenderer

DEFAULT_API_BASE = "http://books-get:8081"
DEFAULT_PORT = 8080
_CORS_METHODS = "GET,HEAD,PUT,PATCH,POST,DELETE"


def _get_json(url: str) -> Any:
    """Fetch ``url`` and decode the first JSON value of its body.

    Raises ValueError when the request fails, the status is not 200 or the
    body is not JSON.
    """
    try:
        response = requests.get(url)
    except requests.RequestException as exc:
        raise ValueError(str(exc)) from exc
    with response:
        if response.status_code != 200:
            raise ValueError(f"unexpected status {response.status_code}")
        text = response.text.lstrip()
    value, _ = json.JSONDecoder().raw_decode(text)
    return value


def _strings(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("expected a JSON array")
    items: list[str] = []
    for item in value:
        if item is None:
            items.append("")
        elif isinstance(item, str):
            items.append(item)
        else:
            raise ValueError("expected an array of strings")
    return items


def fetch_books(api_base: str = DEFAULT_API_BASE) -> list[Book] | None:
    """Return every book from the listing service, or None if it cannot be had."""
    try:
        value = _get_json(f"{api_base}/api/books")
        if value is None:
            return None
        if not isinstance(value, list):
            return None
        return [Book() if item is None else Book.from_json(item) for item in value]
    except ValueError:
        return None


def fetch_authors(api_base: str = DEFAULT_API_BASE) -> list[str]:
    """Return every author from the listing service; empty if it cannot be had."""
    try:
        return _strings(_get_json(f"{api_base}/api/authors"))
    except ValueError:
        return []


def fetch_years(api_base: str = DEFAULT_API_BASE) -> list[str]:
    """Return every year from the listing service; empty if it cannot be had."""
    try:
        return _strings(_get_json(f"{api_base}/api/years"))
    except ValueError:
        return []


def create_app(
    renderer: TemplateRenderer,
    api_base: str = DEFAULT_API_BASE,
    static_dir: str = "css",
) -> Flask:
    """Build the front-end application."""
    app = Flask(
        "web",
        static_folder=os.path.abspath(static_dir),
        static_url_path="/css",
    )

    @app.before_request
    def preflight() -> Response | None:
        if request.method == "OPTIONS" and request.headers.get(
            "Access-Control-Request-Method"
        ):
            response = Response(status=204)
            response.headers["Access-Control-Allow-Methods"] = _CORS_METHODS
            requested = request.headers.get("Access-Control-Request-Headers")
            if requested:
                response.headers["Access-Control-Allow-Headers"] = requested
            return response
        return None

    @app.after_request
    def allow_origin(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers.add("Vary", "Origin")
        return response

    @app.get("/")
    def index() -> str:
        return renderer.render("index", None)

    @app.get("/books")
    def books_page() -> str:
        books = fetch_books(api_base)
        data = None if books is None else [book.to_json() for book in books]
        return renderer.render("book-table", data)

    @app.get("/authors")
    def authors_page() -> str:
        return renderer.render("author-table", fetch_authors(api_base))

    @app.get("/years")
    def years_page() -> str:
        return renderer.render("year-table", fetch_years(api_base))

    @app.get("/search")
    def search_page() -> str:
        return renderer.render("search-bar", None)

    @app.get("/create")
    def create_page() -> tuple[str, int]:
        return "", 204

    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Run the web front-end."""
    parser = argparse.ArgumentParser(prog="books-web", description="Run the web front-end.")
    parser.add_argument("--api", default=DEFAULT_API_BASE, help="base URL of the listing service")
    parser.add_argument("--views", default="views", help="directory of HTML views")
    parser.add_argument("--static", default="css", help="directory served under /css")
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    renderer = TemplateRenderer(args.views)
    app = create_app(renderer, args.api, args.static)
    app.run(host=args.host, port=args.port)